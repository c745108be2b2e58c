"""
Tool base classes and registry.

Tools are named async handlers with a declared parameter list. Every tool
answers with a ToolResponse, serialized as::

    {"content": [{"type": "text", "text": "..."}], "isError": true}

where ``isError`` is only present on error responses.
"""

import logging
from collections.abc import Awaitable
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

logger = logging.getLogger(__name__)


class TextContent(BaseModel):
    """A text block of a tool response."""

    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Response returned by every tool."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = Field(default_factory=list)
    is_error: bool | None = Field(None, alias="isError")

    @classmethod
    def text(cls, text: str, *, is_error: bool = False) -> "ToolResponse":
        """Build a single-text response."""
        return cls(content=[TextContent(text=text)], is_error=True if is_error else None)

    @property
    def joined_text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass
class ToolParameter:
    """Definition of a tool parameter."""

    name: str
    type: str
    description: str
    required: bool = True


ToolHandler = Callable[..., Awaitable[ToolResponse]]


@dataclass
class ToolDefinition:
    """Complete definition of a tool."""

    name: str
    description: str
    handler: ToolHandler
    parameters: list[ToolParameter] = field(default_factory=list)

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema of the tool's arguments."""
        properties = {p.name: {"type": p.type, "description": p.description} for p in self.parameters}
        schema: dict[str, Any] = {"type": "object", "properties": properties}
        required = [p.name for p in self.parameters if p.required]
        if required:
            schema["required"] = required
        return schema


class ToolError(Exception):
    """Base exception for tool errors."""

    def __init__(self, message: str, tool_name: str | None = None):
        self.message = message
        self.tool_name = tool_name
        super().__init__(message)


class ToolNotFoundError(ToolError):
    """Raised when calling a tool that is not registered."""


class ToolValidationError(ToolError):
    """Raised when tool arguments do not match the declared parameters."""


_JSON_TYPES: dict[str, type | tuple[type, ...]] = {
    "string": str,
    "number": (int, float),
    "boolean": bool,
    "object": dict,
    "array": list,
}


class ToolRegistry:
    """Named tools, registered by the feature modules and dispatched by name."""

    def __init__(self):
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, definition: ToolDefinition) -> None:
        if definition.name in self._tools:
            logger.warning(f"Replacing tool: {definition.name}")
        self._tools[definition.name] = definition
        logger.debug(f"Registered tool: {definition.name}")

    def tool(
        self,
        name: str,
        description: str,
        parameters: list[ToolParameter] | None = None,
    ) -> Callable[[ToolHandler], ToolHandler]:
        """
        Decorator registering an async function as a tool.

        Usage:
            @registry.tool("echo", "Echo a value", [ToolParameter("value", "string", "The value")])
            async def echo(value: str) -> ToolResponse:
                return ToolResponse.text(value)
        """

        def decorator(func: ToolHandler) -> ToolHandler:
            self.register(ToolDefinition(name=name, description=description, handler=func, parameters=parameters or []))
            return func

        return decorator

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def list_tools(self) -> list[ToolDefinition]:
        """Registered tools in registration order."""
        return list(self._tools.values())

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def _validate(self, definition: ToolDefinition, arguments: dict[str, Any]) -> dict[str, Any]:
        validated = {}
        for param in definition.parameters:
            value = arguments.get(param.name)
            if value is None:
                if param.required:
                    raise ToolValidationError(f"Missing required parameter: {param.name}", tool_name=definition.name)
                continue
            expected = _JSON_TYPES.get(param.type)
            if expected is not None and not isinstance(value, expected):
                raise ToolValidationError(
                    f"Parameter '{param.name}' must be of type {param.type}", tool_name=definition.name
                )
            validated[param.name] = value
        return validated

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResponse:
        """
        Validate arguments and run a tool.

        Args:
            name: Tool name
            arguments: Tool arguments (unknown keys are ignored)

        Returns:
            The tool's response

        Raises:
            ToolNotFoundError: If no tool has this name
            ToolValidationError: If a required argument is missing or mistyped
        """
        definition = self._tools.get(name)
        if definition is None:
            raise ToolNotFoundError(f"Tool not found: {name}", tool_name=name)

        validated = self._validate(definition, arguments or {})
        logger.debug(f"Calling tool {name} with {validated}")
        return await definition.handler(**validated)
