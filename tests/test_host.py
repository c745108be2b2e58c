"""Tests for the host context and layer resolution."""

from unittest.mock import AsyncMock
from unittest.mock import Mock

import pytest
from content_mcp.host import CLOSE_HOOK
from content_mcp.host import HostContext
from content_mcp.host import HostSettings
from content_mcp.host import Layer
from content_mcp.host import read_host_settings
from content_mcp.host import resolve_layers


class TestHostSettings:
    """Test content-host.yaml parsing."""

    def test_defaults_without_file(self, tmp_path):
        settings = read_host_settings(tmp_path)

        assert settings.modules == ["content"]
        assert settings.extends == []
        assert settings.dev is False

    def test_reads_file(self, tmp_path, write_yaml):
        write_yaml(tmp_path / "content-host.yaml", {"modules": ["content", "i18n"], "extends": "../base", "dev": True})

        settings = read_host_settings(tmp_path)

        assert settings.modules == ["content", "i18n"]
        assert settings.extends == ["../base"]
        assert settings.dev is True

    def test_explicit_empty_modules(self):
        assert HostSettings.from_dict({"modules": []}).modules == []

    def test_rejects_non_mapping(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            HostSettings.from_dict(["content"])

    def test_rejects_non_list_modules(self):
        with pytest.raises(ValueError, match="must be lists"):
            HostSettings.from_dict({"modules": "content"})


class TestResolveLayers:
    """Test the extends chain."""

    def test_single_layer(self, tmp_path):
        assert resolve_layers(tmp_path) == [Layer(root_dir=tmp_path.resolve())]

    def test_extends_chain_innermost_first(self, tmp_path, write_yaml):
        project = tmp_path / "project"
        write_yaml(project / "content-host.yaml", {"extends": ["../theme", "../shared"]})
        write_yaml(tmp_path / "theme" / "content-host.yaml", {"extends": ["../base"]})
        (tmp_path / "shared").mkdir()
        (tmp_path / "base").mkdir()

        layers = resolve_layers(project)

        names = [layer.root_dir.name for layer in layers]
        assert names == ["project", "theme", "base", "shared"]

    def test_shared_layer_listed_once(self, tmp_path, write_yaml):
        write_yaml(tmp_path / "project" / "content-host.yaml", {"extends": ["../a", "../b"]})
        write_yaml(tmp_path / "a" / "content-host.yaml", {"extends": ["../base"]})
        write_yaml(tmp_path / "b" / "content-host.yaml", {"extends": ["../base"]})
        (tmp_path / "base").mkdir()

        names = [layer.root_dir.name for layer in resolve_layers(tmp_path / "project")]

        assert names == ["project", "a", "base", "b"]

    def test_cycle_detected(self, tmp_path, write_yaml):
        write_yaml(tmp_path / "a" / "content-host.yaml", {"extends": ["../b"]})
        write_yaml(tmp_path / "b" / "content-host.yaml", {"extends": ["../a"]})

        with pytest.raises(ValueError, match="Circular layer extends"):
            resolve_layers(tmp_path / "a")

    def test_missing_layer(self, tmp_path, write_yaml):
        write_yaml(tmp_path / "content-host.yaml", {"extends": ["missing"]})

        with pytest.raises(FileNotFoundError, match="Layer directory not found"):
            resolve_layers(tmp_path)


class TestHostContext:
    """Test HostContext construction and hooks."""

    def test_from_project(self, tmp_path, write_yaml):
        write_yaml(tmp_path / "content-host.yaml", {"dev": True, "modules": ["Content"]})

        host = HostContext.from_project(tmp_path)

        assert host.root_dir == tmp_path.resolve()
        assert host.dev is True
        assert host.has_module("content")
        assert not host.has_module("i18n")

    def test_dev_override(self, tmp_path, write_yaml):
        write_yaml(tmp_path / "content-host.yaml", {"dev": True})

        assert HostContext.from_project(tmp_path, dev=False).dev is False

    @pytest.mark.anyio
    async def test_hooks_called_in_order(self, tmp_path):
        host = HostContext(root_dir=tmp_path, layers=[])
        calls = []
        host.hook("event", lambda value: calls.append(("sync", value)))
        async_handler = AsyncMock(side_effect=lambda value: calls.append(("async", value)))
        host.hook("event", async_handler)

        await host.call_hook("event", 1)

        assert calls == [("sync", 1), ("async", 1)]
        async_handler.assert_awaited_once_with(1)

    @pytest.mark.anyio
    async def test_unregister(self, tmp_path):
        host = HostContext(root_dir=tmp_path, layers=[])
        handler = Mock()
        unregister = host.hook(CLOSE_HOOK, handler)

        unregister()
        await host.close()

        handler.assert_not_called()

    @pytest.mark.anyio
    async def test_handler_errors_propagate(self, tmp_path):
        host = HostContext(root_dir=tmp_path, layers=[])
        host.hook(CLOSE_HOOK, Mock(side_effect=RuntimeError("boom")))

        with pytest.raises(RuntimeError, match="boom"):
            await host.close()

    def test_handlers_returns_copy(self, tmp_path):
        host = HostContext(root_dir=tmp_path, layers=[])
        handler = Mock()
        host.hook(CLOSE_HOOK, handler)

        handlers = host.handlers(CLOSE_HOOK)
        handlers.clear()

        assert host.handlers(CLOSE_HOOK) == [handler]
        assert host.handlers("unknown") == []

    def test_from_project_reads_each_host_file_once(self, tmp_path, write_yaml, monkeypatch):
        write_yaml(tmp_path / "project" / "content-host.yaml", {"extends": ["../theme"]})
        (tmp_path / "theme").mkdir()
        read_dirs = []

        def recording_read(root_dir):
            read_dirs.append(root_dir.name)
            return read_host_settings(root_dir)

        monkeypatch.setattr("content_mcp.host.read_host_settings", recording_read)

        host = HostContext.from_project(tmp_path / "project")

        assert [layer.root_dir.name for layer in host.layers] == ["project", "theme"]
        assert read_dirs == ["project", "theme"]
