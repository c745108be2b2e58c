"""Tests for collection definition helpers and the JSON Schema projection."""

import pytest
from content_mcp.schema import META_FIELDS
from content_mcp.schema import PAGE_FIELDS
from content_mcp.schema import CollectionSource
from content_mcp.schema import define_collection
from content_mcp.schema import define_content_config
from content_mcp.schema import schema_to_json_schema
from pydantic import ValidationError


class TestDefineCollection:
    """Test define_collection()."""

    def test_page_collection_extended_schema_order(self):
        collection = define_collection(type="page", source="blog/*.md", schema={"tags": "json", "date": "date"})

        assert list(collection.extended_schema) == [*META_FIELDS, *PAGE_FIELDS, "tags", "date"]
        assert collection.fields == collection.extended_schema
        assert collection.schema_ == {"tags": "json", "date": "date"}

    def test_untyped_collection_gets_page_fields(self):
        collection = define_collection()

        assert collection.type is None
        assert "title" in collection.extended_schema

    def test_data_collection_has_no_page_fields(self):
        collection = define_collection(type="data", schema={"name": "string"})

        assert list(collection.extended_schema) == [*META_FIELDS, "name"]

    def test_authored_field_overrides_standard_field(self):
        collection = define_collection(schema={"title": "number"})

        assert collection.extended_schema["title"] == "number"

    def test_source_normalization(self):
        single = define_collection(source="**/*")
        many = define_collection(source=["a/*.md", {"include": "b/*.md", "exclude": ["b/drafts/*"]}])

        assert single.source == [CollectionSource(include="**/*")]
        assert [s.include for s in many.source] == ["a/*.md", "b/*.md"]
        assert many.source[1].exclude == ["b/drafts/*"]
        assert define_collection().source is None

    def test_unknown_field_type_rejected(self):
        with pytest.raises(ValidationError):
            define_collection(schema={"tags": "array"})

    def test_unknown_collection_type_rejected(self):
        with pytest.raises(ValidationError):
            define_collection(type="blog")


class TestDefineContentConfig:
    """Test define_content_config()."""

    def test_builds_collections_in_file_order(self):
        config = define_content_config(
            {
                "collections": {
                    "blog": {"type": "page", "source": "blog/*.md", "schema": {"image": "string"}},
                    "authors": {"type": "data", "source": "authors/*.yml"},
                }
            }
        )

        assert list(config.collections) == ["blog", "authors"]
        assert config.collections["authors"].type == "data"

    def test_empty_file_has_no_collections(self):
        assert define_content_config(None).collections == {}
        assert define_content_config({}).collections == {}
        assert define_content_config({"collections": None}).collections == {}

    def test_empty_definition_allowed(self):
        config = define_content_config({"collections": {"notes": None}})

        assert config.collections["notes"].type is None

    def test_non_mapping_file_rejected(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            define_content_config(["blog"])

    def test_unknown_top_level_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown content config keys"):
            define_content_config({"colections": {}})

    def test_non_string_keys_become_names(self):
        config = define_content_config({"collections": {2024: {}, True: {}, None: {}, "blog": {}}})

        assert list(config.collections) == ["2024", "true", "null", "blog"]

    def test_unknown_collection_key_rejected(self):
        with pytest.raises(ValidationError):
            define_content_config({"collections": {"blog": {"sources": "blog/*.md"}}})


class TestSchemaToJsonSchema:
    """Test schema_to_json_schema()."""

    def test_field_types(self):
        schema = schema_to_json_schema(
            {"title": "string", "count": "number", "draft": "boolean", "date": "date", "meta": "json"},
            title="blog",
        )

        assert schema["type"] == "object"
        assert schema["title"] == "blog"
        assert schema["additionalProperties"] is False
        props = schema["properties"]
        assert props["title"]["type"] == "string"
        assert props["count"]["type"] == "number"
        assert props["draft"]["type"] == "boolean"
        assert props["date"] == {"format": "date-time", "title": "date", "type": "string"}
        assert "type" not in props["meta"]
        assert schema["required"] == ["title", "count", "draft", "date", "meta"]

    def test_names_that_shadow_model_attributes(self):
        """Field names like 'json' or '_draft' are kept verbatim."""
        schema = schema_to_json_schema({"json": "json", "_draft": "boolean", "structureVersion": "string"})

        assert list(schema["properties"]) == ["json", "_draft", "structureVersion"]
