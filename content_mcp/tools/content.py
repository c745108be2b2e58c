"""Content collection tools.

Registers the tools that describe the host's content directory and its
resolved collections. Nothing is registered when the host does not have the
content module installed.
"""

import json
import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from ..collections import DroppedNames
from ..host import CONFIG_CHANGE_HOOK
from ..host import HostContext
from ..loader import load_content_config
from ..schema import ResolvedCollection
from ..schema import schema_to_json_schema
from .base import ToolParameter
from .base import ToolRegistry
from .base import ToolResponse

logger = logging.getLogger(__name__)

CONTENT_MODULE = "content"

COLLECTION_PARAMETER = ToolParameter("collection", "string", "Name of the collection")


@dataclass
class ContentToolsState:
    """Resolved collections the content tools answer from."""

    collections: list[ResolvedCollection] = field(default_factory=list)
    dropped: DroppedNames = field(default_factory=DroppedNames)

    def find(self, name: str) -> ResolvedCollection | None:
        return next((c for c in self.collections if c.name == name), None)

    def names(self) -> list[str]:
        return [c.name for c in self.collections]


def collection_json_schema(collection: ResolvedCollection) -> dict:
    """JSON Schema of a collection's extended schema."""
    return schema_to_json_schema(collection.extended_schema, title=collection.name)


async def register_content_tools(host: HostContext, registry: ToolRegistry) -> ContentToolsState | None:
    """
    Load the host's content config and register the content tools.

    Args:
        host: Host context
        registry: Registry receiving the tools

    Returns:
        State shared by the registered tools, or None when the content module is not installed
    """
    if not host.has_module(CONTENT_MODULE):
        logger.debug("Content module not installed, skipping content tools")
        return None

    state = ContentToolsState()
    result = await load_content_config(host, diagnostics=state.dropped)
    state.collections = result.collections

    if host.dev:

        async def reload(path: Path) -> None:
            dropped = DroppedNames()
            reloaded = await load_content_config(host, diagnostics=dropped, watch=False)
            state.collections = reloaded.collections
            state.dropped = dropped
            logger.info(f"Reloaded content collections after change to {path}: {', '.join(state.names())}")

        host.hook(CONFIG_CHANGE_HOOK, reload)

    root_dir = str(host.root_dir)

    @registry.tool("get-content-directory", "Get the content directory")
    async def get_content_directory() -> ToolResponse:
        return ToolResponse.text(f"{root_dir}/content/")

    @registry.tool(
        "get-content-directory-by-collection",
        "Get the content directory by collection",
        [COLLECTION_PARAMETER],
    )
    async def get_content_directory_by_collection(collection: str) -> ToolResponse:
        return ToolResponse.text(f"{root_dir}/content/{collection}")

    @registry.tool("list-collections", "List all collections in the content directory")
    async def list_collections() -> ToolResponse:
        return ToolResponse.text(f"Collections: {', '.join(state.names())}")

    @registry.tool(
        "get-collection-schema",
        "Get the schema for a collection, make sure to create the file after generating the content",
        [COLLECTION_PARAMETER],
    )
    async def get_collection_schema(collection: str) -> ToolResponse:
        item = state.find(collection)
        if item is None:
            return ToolResponse.text(f"Collection {collection} not found", is_error=True)

        schema = json.dumps(collection_json_schema(item), indent=2)
        return ToolResponse.text(f"Schema for {collection} collection to be generated: {schema}")

    logger.info(f"Registered content tools for {len(state.collections)} collection(s)")
    return state
