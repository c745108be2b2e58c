"""Content collection discovery and tools for layered host projects."""

from .host import HostContext
from .host import Layer
from .loader import load_content_config
from .tools import ToolRegistry
from .tools import register_content_tools

__all__ = ["HostContext", "Layer", "ToolRegistry", "load_content_config", "register_content_tools"]
