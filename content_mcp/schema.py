"""Pydantic schemas for content collections and the helpers that define them."""

from datetime import datetime
from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import create_model

FieldType = Literal["string", "number", "boolean", "date", "json"]
CollectionType = Literal["page", "data"]

# Standard fields every collection carries, in declaration order
META_FIELDS: dict[str, FieldType] = {
    "id": "string",
    "stem": "string",
    "extension": "string",
    "meta": "json",
}

# Extra standard fields for page collections
PAGE_FIELDS: dict[str, FieldType] = {
    "path": "string",
    "title": "string",
    "description": "string",
    "seo": "json",
    "body": "json",
    "navigation": "json",
}

FIELD_PYTHON_TYPES: dict[str, Any] = {
    "string": str,
    "number": float,
    "boolean": bool,
    "date": datetime,
    "json": Any,
}


class CollectionSource(BaseModel):
    """Where the documents of a collection live, relative to the content directory."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    include: str = Field(..., description="Glob of files to include")
    exclude: list[str] | None = Field(None, description="Globs of files to skip")
    prefix: str | None = Field(None, description="Path prefix for generated routes")
    cwd: str | None = Field(None, description="Base directory the globs are relative to")


class CollectionDefinitionInput(BaseModel):
    """A collection as authored in a content config file."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    type: CollectionType | None = Field(None, description="Collection type, 'page' when omitted")
    source: str | CollectionSource | list[str | CollectionSource] | None = Field(
        None, description="One or more source globs or source objects"
    )
    schema_: dict[str, FieldType] | None = Field(None, alias="schema", description="Field name to field type")


class DefinedCollection(BaseModel):
    """A collection after the definition helper has extended its schema."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: CollectionType | None = None
    source: list[CollectionSource] | None = None
    schema_: dict[str, FieldType] = Field(default_factory=dict, alias="schema")
    extended_schema: dict[str, FieldType] = Field(default_factory=dict)
    fields: dict[str, FieldType] = Field(default_factory=dict)


class ResolvedCollection(DefinedCollection):
    """A named collection ready to be served, produced once per load cycle."""

    name: str
    table_name: str
    type: CollectionType = "page"
    private: bool = False


class ContentConfig(BaseModel):
    """The collections exported by one layer's config file."""

    collections: dict[str, DefinedCollection] = Field(default_factory=dict)


def _normalize_source(
    source: str | CollectionSource | list[str | CollectionSource] | None,
) -> list[CollectionSource] | None:
    if source is None:
        return None
    items = source if isinstance(source, list) else [source]
    return [CollectionSource(include=item) if isinstance(item, str) else item for item in items]


def define_collection(
    type: CollectionType | None = None,
    source: str | CollectionSource | list[str | CollectionSource] | None = None,
    schema: dict[str, FieldType] | None = None,
) -> DefinedCollection:
    """Define a collection, extending its schema with the standard fields.

    The extended schema lists the meta fields first, then the page fields for
    page collections, then the authored fields. Authored fields replace
    standard fields of the same name.

    Args:
        type: "page" or "data"; page collections get the page fields
        source: Glob string, source object, or a list of either
        schema: Authored field name to field type mapping

    Returns:
        DefinedCollection with normalized sources and extended schema
    """
    authored = CollectionDefinitionInput(type=type, source=source, schema=schema)
    user_fields = dict(authored.schema_ or {})

    extended: dict[str, FieldType] = dict(META_FIELDS)
    if (authored.type or "page") == "page":
        extended.update(PAGE_FIELDS)
    extended.update(user_fields)

    return DefinedCollection(
        type=authored.type,
        source=_normalize_source(authored.source),
        schema=user_fields,
        extended_schema=extended,
        fields=dict(extended),
    )


def _collection_key(key: Any) -> str:
    """Collection name of a parsed config key (YAML reads keys like 2024 or true as non-strings)."""
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def define_content_config(raw: Any) -> ContentConfig:
    """Turn a parsed content config file into a ContentConfig.

    This is the default config-definition helper handed to the loader.

    Args:
        raw: Parsed file content; None (empty file) counts as no collections

    Returns:
        ContentConfig with every collection passed through define_collection

    Raises:
        ValueError: If the file or its collections are not mappings
        pydantic.ValidationError: If a collection definition is malformed
    """
    if raw is None:
        return ContentConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"Content config must be a mapping, got {type(raw).__name__}")

    unknown = set(raw) - {"collections"}
    if unknown:
        raise ValueError(f"Unknown content config keys: {', '.join(sorted(map(str, unknown)))}")

    collections = raw.get("collections") or {}
    if not isinstance(collections, dict):
        raise ValueError("'collections' must be a mapping of collection name to definition")

    defined: dict[str, DefinedCollection] = {}
    for name, entry in collections.items():
        name = _collection_key(name)
        entry = entry or {}
        if not isinstance(entry, dict):
            raise ValueError(f"Collection '{name}' must be a mapping, got {type(entry).__name__}")
        authored = CollectionDefinitionInput.model_validate(entry)
        defined[name] = define_collection(type=authored.type, source=authored.source, schema=authored.schema_)

    return ContentConfig(collections=defined)


def schema_to_json_schema(fields: dict[str, FieldType], title: str = "Collection") -> dict[str, Any]:
    """Project a field map to JSON Schema.

    Args:
        fields: Field name to field type mapping
        title: Title of the generated schema

    Returns:
        JSON Schema object with every field required and no extra properties
    """
    # Aliases keep names like "json" or "_draft" clear of BaseModel attributes
    definitions = {
        f"field_{index}": (
            FIELD_PYTHON_TYPES[field_type],
            Field(..., alias=name, title=name),
        )
        for index, (name, field_type) in enumerate(fields.items())
    }
    model = create_model(title, __config__=ConfigDict(extra="forbid"), **definitions)
    return model.model_json_schema(by_alias=True)
