"""Tests for merging layer collection maps."""

from content_mcp.lib.merge_utils import merge_collections
from content_mcp.schema import ContentConfig
from content_mcp.schema import define_collection


def test_merge_empty():
    assert merge_collections([]) == {}


def test_later_config_wins():
    base = ContentConfig(collections={"blog": define_collection(type="page", schema={"image": "string"})})
    overlay = ContentConfig(collections={"blog": define_collection(type="data")})

    merged = merge_collections([base, overlay])

    assert merged["blog"].type == "data"
    assert "image" not in merged["blog"].fields  # whole definition replaced


def test_key_keeps_first_position():
    base = ContentConfig(collections={"a": define_collection(), "b": define_collection()})
    overlay = ContentConfig(collections={"c": define_collection(), "a": define_collection(type="data")})

    merged = merge_collections([base, overlay])

    assert list(merged) == ["a", "b", "c"]
    assert merged["a"].type == "data"


def test_inputs_not_modified():
    base = ContentConfig(collections={"a": define_collection()})
    overlay = ContentConfig(collections={"b": define_collection()})

    merge_collections([base, overlay])

    assert list(base.collections) == ["a"]
    assert list(overlay.collections) == ["b"]
