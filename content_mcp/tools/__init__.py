"""
Tools package.

- base: ToolRegistry, ToolDefinition, ToolResponse and tool errors
- content: Content collection tools registered against a host
"""

from .base import TextContent
from .base import ToolDefinition
from .base import ToolError
from .base import ToolNotFoundError
from .base import ToolParameter
from .base import ToolRegistry
from .base import ToolResponse
from .base import ToolValidationError
from .content import ContentToolsState
from .content import register_content_tools

__all__ = [
    "ContentToolsState",
    "TextContent",
    "ToolDefinition",
    "ToolError",
    "ToolNotFoundError",
    "ToolParameter",
    "ToolRegistry",
    "ToolResponse",
    "ToolValidationError",
    "register_content_tools",
]
