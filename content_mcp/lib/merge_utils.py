"""Merge utilities for layered content configs.

The merge is shallow: a collection defined in a more
specific layer replaces the whole definition from a base layer. Fields of two
definitions of the same collection are never combined.
"""

from collections.abc import Iterable
from functools import reduce

from ..schema import ContentConfig
from ..schema import DefinedCollection


def merge_collections(configs: Iterable[ContentConfig]) -> dict[str, DefinedCollection]:
    """Fold the collection maps of several layers into one.

    Configs are applied left to right, so later configs win on key collision.
    A key keeps the position of its first appearance.

    Args:
        configs: Layer configs ordered from base layer to most specific layer

    Returns:
        New merged collection map (inputs are not modified)
    """
    return reduce(lambda merged, config: {**merged, **config.collections}, configs, {})
