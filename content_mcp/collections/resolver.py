"""
Collection resolver - Turn authored collection definitions into resolved collections.

Resolution is a filter-map over the merged collection map: invalid names are
dropped, everything else gets its defaults, table name and privacy flag. The
reserved ``info`` collection is injected before resolving so an authored
``info`` entry never survives.
"""

import logging

from ..schema import DefinedCollection
from ..schema import ResolvedCollection
from .utils import get_table_name
from .utils import is_valid_collection_name

logger = logging.getLogger(__name__)

INFO_COLLECTION = "info"

INFO_SCHEMA = {
    "id": "string",
    "version": "string",
    "structureVersion": "string",
    "ready": "boolean",
}


def info_collection() -> DefinedCollection:
    """Build the reserved definition describing the content store itself."""
    return DefinedCollection(
        type="data",
        source=None,
        schema=dict(INFO_SCHEMA),
        extended_schema=dict(INFO_SCHEMA),
        fields={},
    )


class DroppedNames:
    """Diagnostics collaborator that records collection names dropped during resolution."""

    def __init__(self):
        self.names: list[str] = []

    def record(self, name: object) -> None:
        """Record a dropped name and log it."""
        self.names.append(str(name))
        logger.warning(f"Ignoring collection '{name}': not a valid collection name")

    @property
    def count(self) -> int:
        return len(self.names)

    def __repr__(self) -> str:
        return f"DroppedNames({', '.join(self.names)})"


def resolve_collection(name: object, collection: DefinedCollection) -> ResolvedCollection | None:
    """
    Resolve a single collection definition.

    Args:
        name: Collection name (the key in the config map)
        collection: Collection definition

    Returns:
        ResolvedCollection, or None if the name is not a valid identifier
    """
    if not is_valid_collection_name(name):
        return None

    data = collection.model_dump(by_alias=True)
    data.update(
        name=name,
        type=collection.type or "page",
        table_name=get_table_name(name),
        private=name == INFO_COLLECTION,
    )
    return ResolvedCollection.model_validate(data)


def resolve_collections(
    collections: dict[str, DefinedCollection],
    diagnostics: DroppedNames | None = None,
) -> list[ResolvedCollection]:
    """
    Resolve every collection in a merged config map.

    Overwrites (or appends) the reserved ``info`` entry in ``collections``
    first, then resolves every entry in map order.

    Args:
        collections: Merged collection map; mutated in place
        diagnostics: Optional collaborator notified of every dropped name

    Returns:
        Resolved collections in map order, invalid names omitted
    """
    collections[INFO_COLLECTION] = info_collection()

    resolved = []
    for name, collection in collections.items():
        result = resolve_collection(name, collection)
        if result is None:
            if diagnostics is not None:
                diagnostics.record(name)
            else:
                logger.warning(f"Ignoring collection '{name}': not a valid collection name")
            continue
        resolved.append(result)

    logger.debug(f"Resolved {len(resolved)} collections: {', '.join(c.name for c in resolved)}")
    return resolved
