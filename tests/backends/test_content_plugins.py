"""Tests for the framework-backed content-plugin registry."""

import json

import pytest
import pytest_asyncio

from tenant_installer.backends.content_plugins import FrameworkContentPlugin, FrameworkPluginRegistry
from tenant_installer.backends.sql_store import SqlDataStore
from tenant_installer.exceptions import ExternalServiceError
from tenant_installer.provisioning.capabilities import ContentPlugin, PluginRegistry


def _package(framework, category, name, version="1.0.0"):
    folder = framework / "src" / f"{category}s" / name
    folder.mkdir(parents=True)
    (folder / "package.json").write_text(json.dumps({"name": name, "version": version}), encoding="utf-8")
    (folder / "index.js").write_text("//", encoding="utf-8")
    return folder


@pytest_asyncio.fixture
async def store(tmp_path):
    store = SqlDataStore(f"sqlite:///{tmp_path / 'plugins.db'}")
    await store.connect()
    yield store
    await store.close()


@pytest.fixture
def framework(tmp_path):
    root = tmp_path / "framework"
    _package(root, "component", "adapt-contrib-text", "5.0.0")
    _package(root, "component", "adapt-contrib-media", "6.1.0")
    _package(root, "theme", "adapt-contrib-vanilla")
    return root


def test_manifest_lists_category_packages(framework, tmp_path):
    plugin = FrameworkContentPlugin(SqlDataStore("sqlite://"), "component", framework, tmp_path / "data")
    assert isinstance(plugin, ContentPlugin)
    assert plugin.get_plugin_type() == "component"
    assert plugin.manifest == {"adapt-contrib-media": "6.1.0", "adapt-contrib-text": "5.0.0"}


def test_missing_category_has_empty_manifest(framework, tmp_path):
    assert FrameworkContentPlugin(SqlDataStore("sqlite://"), "menu", framework, tmp_path / "data").manifest == {}


def test_unreadable_manifest(framework, tmp_path):
    broken = framework / "src" / "extensions" / "adapt-broken"
    broken.mkdir(parents=True)
    (broken / "package.json").write_text("{not json", encoding="utf-8")
    plugin = FrameworkContentPlugin(SqlDataStore("sqlite://"), "extension", framework, tmp_path / "data")
    with pytest.raises(ExternalServiceError):
        plugin.manifest


@pytest.mark.asyncio
async def test_update_packages_records_rows(store, framework, tmp_path):
    plugin = FrameworkContentPlugin(store, "component", framework, tmp_path / "data")
    await plugin.update_packages(plugin.manifest, {"tenant_id": "t1", "skip_tenant_copy": True})
    await plugin.update_packages(plugin.manifest, {"tenant_id": "t1", "skip_tenant_copy": True})

    rows = await store.retrieve("contentpackage", {"tenant_id": "t1"})
    assert sorted((r["name"], r["version"]) for r in rows) == [
        ("adapt-contrib-media", "6.1.0"),
        ("adapt-contrib-text", "5.0.0"),
    ]
    assert not (tmp_path / "data").exists()


@pytest.mark.asyncio
async def test_update_packages_copies_sources(store, framework, tmp_path):
    plugin = FrameworkContentPlugin(store, "theme", framework, tmp_path / "data")
    await plugin.update_packages(plugin.manifest, {"tenant_id": "t1"})
    assert (tmp_path / "data" / "t1" / "themes" / "adapt-contrib-vanilla" / "index.js").exists()


@pytest.mark.asyncio
async def test_update_packages_validation(store, framework, tmp_path):
    plugin = FrameworkContentPlugin(store, "component", framework, tmp_path / "data")
    with pytest.raises(ExternalServiceError):
        await plugin.update_packages(plugin.manifest, {})
    with pytest.raises(ExternalServiceError):
        await plugin.update_packages({"adapt-unknown": "1.0.0"}, {"tenant_id": "t1"})


@pytest.mark.asyncio
async def test_registry_caches_plugins_per_category(store, framework, tmp_path):
    registry = FrameworkPluginRegistry(store, framework, tmp_path / "data")
    assert isinstance(registry, PluginRegistry)
    first = await registry.get_content_plugin("component")
    assert await registry.get_content_plugin("component") is first
    with pytest.raises(ExternalServiceError):
        await registry.get_content_plugin("widget")
