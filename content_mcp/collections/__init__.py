"""
Collections module - Naming and resolution of content collections.

Public API:
- get_table_name: Storage identifier for a collection name
- is_valid_collection_name: Naming grammar check
- resolve_collection: Resolve one authored definition
- resolve_collections: Resolve a merged config map (injects the reserved info collection)
- DroppedNames: Diagnostics for names dropped during resolution
"""

from .resolver import INFO_COLLECTION
from .resolver import DroppedNames
from .resolver import info_collection
from .resolver import resolve_collection
from .resolver import resolve_collections
from .utils import TABLE_PREFIX
from .utils import get_table_name
from .utils import is_valid_collection_name

__all__ = [
    "INFO_COLLECTION",
    "TABLE_PREFIX",
    "DroppedNames",
    "get_table_name",
    "info_collection",
    "is_valid_collection_name",
    "resolve_collection",
    "resolve_collections",
]
