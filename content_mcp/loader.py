"""Layered content config loader.

Every host layer may carry a ``content.config.{yaml,yml,toml,json}`` file.
Layers are loaded concurrently, then their collection maps are merged from the
outermost layer to the project layer so the project wins on name collisions.
"""

import asyncio
import json
import logging
import tomllib
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

import yaml

from .collections import DroppedNames
from .collections import resolve_collections
from .host import CLOSE_HOOK
from .host import CONFIG_CHANGE_HOOK
from .host import HostContext
from .host import Layer
from .lib.merge_utils import merge_collections
from .schema import ContentConfig
from .schema import ResolvedCollection
from .schema import define_collection
from .schema import define_content_config
from .watcher import ConfigWatcher

logger = logging.getLogger(__name__)

CONFIG_NAME = "content"
CONFIG_EXTENSIONS = (".yaml", ".yml", ".toml", ".json")

ConfigDefiner = Callable[[Any], ContentConfig]


def default_content_config() -> ContentConfig:
    """Config used for a layer without a content config file."""
    return ContentConfig(collections={"content": define_collection(type="page", source="**/*")})


@dataclass
class LoadedConfig:
    """Result of loading one layer."""

    layer: Layer
    config: ContentConfig
    config_file: Path | None = None
    watcher: ConfigWatcher | None = None

    async def unwatch(self) -> None:
        if self.watcher is not None:
            await self.watcher.stop()


@dataclass
class ContentLoadResult:
    """Resolved collections plus the per-layer configs they came from."""

    collections: list[ResolvedCollection] = field(default_factory=list)
    configs: list[LoadedConfig] = field(default_factory=list)


def find_config_file(root_dir: Path, name: str = CONFIG_NAME) -> Path | None:
    """Return the first ``{name}.config.<ext>`` file in a layer root, if any."""
    for extension in CONFIG_EXTENSIONS:
        candidate = root_dir / f"{name}.config{extension}"
        if candidate.is_file():
            return candidate
    return None


def read_config_file(path: Path) -> Any:
    """
    Parse a config file according to its extension.

    Raises:
        yaml.YAMLError / tomllib.TOMLDecodeError / json.JSONDecodeError: On malformed content
        OSError: If the file cannot be read
    """
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f)
    with open(path, encoding="utf-8") as f:
        if path.suffix == ".json":
            return json.load(f)
        return yaml.safe_load(f)


async def load_layer_config(
    layer: Layer,
    definer: ConfigDefiner = define_content_config,
    name: str = CONFIG_NAME,
) -> LoadedConfig:
    """
    Load the content config of a single layer.

    Args:
        layer: Layer to load
        definer: Config-definition helper turning parsed file content into a ContentConfig
        name: Config base name

    Returns:
        LoadedConfig; the default config when the layer has no file
    """
    config_file = find_config_file(layer.root_dir, name)
    if config_file is None:
        logger.debug(f"No {name} config in {layer.root_dir}, using default")
        return LoadedConfig(layer=layer, config=default_content_config())

    raw = await asyncio.to_thread(read_config_file, config_file)
    config = definer(raw)
    logger.debug(f"Loaded {len(config.collections)} collection(s) from {config_file}")
    return LoadedConfig(layer=layer, config=config, config_file=config_file)


async def load_content_config(
    host: HostContext,
    *,
    definer: ConfigDefiner = define_content_config,
    diagnostics: DroppedNames | None = None,
    watch: bool | None = None,
) -> ContentLoadResult:
    """
    Load, merge and resolve the content config of every host layer.

    Args:
        host: Host context supplying layers (innermost first) and hooks
        definer: Config-definition helper passed to every layer load
        diagnostics: Collaborator notified of dropped collection names
        watch: Start file watchers; defaults to the host's development flag

    Returns:
        ContentLoadResult; no collections at all when no layer defines any

    Raises:
        Any parse, validation or file-system error from a layer load
    """
    layers = list(reversed(host.layers))
    configs = list(await asyncio.gather(*(load_layer_config(layer, definer) for layer in layers)))

    if host.dev if watch is None else watch:
        _watch_configs(host, configs)

    merged = merge_collections(loaded.config for loaded in configs)
    if not merged:
        logger.info("No content collections configured")
        return ContentLoadResult(collections=[], configs=configs)

    collections = resolve_collections(merged, diagnostics)
    logger.info(f"Loaded {len(collections)} content collection(s) from {len(layers)} layer(s)")
    return ContentLoadResult(collections=collections, configs=configs)


def _watch_configs(host: HostContext, configs: list[LoadedConfig]) -> None:
    async def notify(path: Path) -> None:
        await host.call_hook(CONFIG_CHANGE_HOOK, path)

    for loaded in configs:
        if loaded.config_file is not None:
            loaded.watcher = ConfigWatcher(loaded.config_file, notify)
            loaded.watcher.start()

    async def unwatch_all() -> None:
        await asyncio.gather(*(loaded.unwatch() for loaded in configs))

    host.hook(CLOSE_HOOK, unwatch_all)
