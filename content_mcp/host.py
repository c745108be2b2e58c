"""Host project context: layers, development flag, installed modules and lifecycle hooks.

A host project is a directory with an optional ``content-host.yaml``:

    modules: [content]
    extends:
      - ../shared-layer
    dev: false

The project itself is the innermost layer; each ``extends`` entry (resolved
relative to the layer declaring it, recursively) adds an outer layer after it.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

HOST_CONFIG_FILES = ("content-host.yaml", "content-host.yml")
DEFAULT_MODULES = ["content"]

CLOSE_HOOK = "close"
CONFIG_CHANGE_HOOK = "content:config:change"


@dataclass
class Layer:
    """One composable configuration root."""

    root_dir: Path


@dataclass
class HostSettings:
    """Parsed ``content-host.yaml``."""

    modules: list[str] = field(default_factory=lambda: list(DEFAULT_MODULES))
    extends: list[str] = field(default_factory=list)
    dev: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> HostSettings:
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(f"Host config must be a mapping, got {type(data).__name__}")
        modules = data.get("modules", list(DEFAULT_MODULES))
        extends = data.get("extends") or []
        if isinstance(extends, str):
            extends = [extends]
        if not isinstance(modules, list) or not isinstance(extends, list):
            raise ValueError("Host config 'modules' and 'extends' must be lists")
        return cls(modules=[str(m) for m in modules], extends=[str(e) for e in extends], dev=bool(data.get("dev", False)))


def find_host_config(root_dir: Path) -> Path | None:
    """Find the host config file in a directory, if any."""
    for name in HOST_CONFIG_FILES:
        candidate = root_dir / name
        if candidate.is_file():
            return candidate
    return None


def read_host_settings(root_dir: Path) -> HostSettings:
    """Read host settings from a directory (defaults when there is no file)."""
    config_file = find_host_config(root_dir)
    if config_file is None:
        return HostSettings()
    with open(config_file, encoding="utf-8") as f:
        return HostSettings.from_dict(yaml.safe_load(f))


def resolve_layers(
    root_dir: Path,
    _visited: list[Path] | None = None,
    settings: HostSettings | None = None,
) -> list[Layer]:
    """
    Resolve the layer chain of a project, innermost first.

    Args:
        root_dir: Project (or layer) directory
        _visited: Layers on the current extends path (for cycle detection)
        settings: Already parsed settings of root_dir (read from disk when None)

    Returns:
        Layers ordered innermost (root_dir) to outermost

    Raises:
        ValueError: If layers extend each other in a cycle
        FileNotFoundError: If an extended layer directory does not exist
    """
    root_dir = root_dir.resolve()
    if _visited is None:
        _visited = []

    if root_dir in _visited:
        chain = " -> ".join(str(p) for p in [*_visited, root_dir])
        raise ValueError(f"Circular layer extends detected: {chain}")

    if not root_dir.is_dir():
        raise FileNotFoundError(f"Layer directory not found: {root_dir}")

    if settings is None:
        settings = read_host_settings(root_dir)
    layers = [Layer(root_dir=root_dir)]
    for extended in settings.extends:
        for layer in resolve_layers(root_dir / extended, [*_visited, root_dir]):
            if layer not in layers:
                layers.append(layer)
    return layers


@dataclass
class HostContext:
    """What the content tools need from the host framework."""

    root_dir: Path
    layers: list[Layer]
    dev: bool = False
    modules: list[str] = field(default_factory=lambda: list(DEFAULT_MODULES))
    _hooks: dict[str, list[Callable[..., Any]]] = field(default_factory=dict, repr=False)

    @classmethod
    def from_project(cls, root_dir: Path, dev: bool | None = None) -> HostContext:
        """
        Build a host context from a project directory.

        Args:
            root_dir: Project directory
            dev: Force development mode on or off (None uses the host config)

        Returns:
            HostContext with the resolved layer chain
        """
        root_dir = root_dir.resolve()
        settings = read_host_settings(root_dir)
        layers = resolve_layers(root_dir, settings=settings)
        logger.debug(f"Host {root_dir}: {len(layers)} layer(s), modules={settings.modules}")
        return cls(
            root_dir=root_dir,
            layers=layers,
            dev=settings.dev if dev is None else dev,
            modules=settings.modules,
        )

    def has_module(self, name: str) -> bool:
        """Check whether a module is installed (case-insensitive)."""
        return name.lower() in (m.lower() for m in self.modules)

    def hook(self, name: str, handler: Callable[..., Any]) -> Callable[[], None]:
        """
        Register a lifecycle hook handler.

        Args:
            name: Hook name (e.g. "close")
            handler: Sync or async callable invoked with the hook arguments

        Returns:
            Function that unregisters the handler
        """
        self._hooks.setdefault(name, []).append(handler)

        def unregister() -> None:
            handlers = self._hooks.get(name, [])
            if handler in handlers:
                handlers.remove(handler)

        return unregister

    def handlers(self, name: str) -> list[Callable[..., Any]]:
        """Handlers registered for a hook, in registration order."""
        return list(self._hooks.get(name, []))

    async def call_hook(self, name: str, *args: Any) -> None:
        """Call every handler registered for a hook, in registration order."""
        for handler in self.handlers(name):
            result = handler(*args)
            if inspect.isawaitable(result):
                await result

    async def close(self) -> None:
        """Signal shutdown to every ``close`` handler."""
        await self.call_hook(CLOSE_HOOK)
