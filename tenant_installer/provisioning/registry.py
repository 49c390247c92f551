"""Runtime discovery and construction of installer collaborators.

Data-store drivers and authentication plugins are discovered once, at
start-up, and offered to the operator as index menus. Two sources are
consulted:

- Built-in SQLAlchemy dialects whose DB-API module can be imported
  (``sqlite`` is always available).
- Installed distributions advertising entry points in the
  ``tenant_installer.drivers`` and ``tenant_installer.auth`` groups. A
  driver entry point loads to ``factory(resolved, data_root) -> DataStore``;
  an auth entry point loads to ``factory(store) -> AuthPlugin``.

:class:`Backends` bundles the factories so the pipeline (and the tests)
can swap every collaborator at once.
"""

from __future__ import annotations

import importlib.util
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from importlib.metadata import EntryPoint, entry_points
from pathlib import Path
from typing import Any

from tenant_installer import config as _config
from tenant_installer.exceptions import ConfigurationError
from tenant_installer.provisioning.capabilities import (
    AuthPlugin,
    Authorization,
    DataStore,
    PluginRegistry,
)

logger = logging.getLogger(__name__)

# Dialect name -> DB-API module that must be importable.
BUILTIN_DRIVERS: dict[str, str] = {
    "sqlite": "sqlite3",
    "postgresql": "psycopg2",
    "mysql": "pymysql",
}


def _entry_points(group: str) -> dict[str, EntryPoint]:
    return {ep.name: ep for ep in entry_points(group=group)}


def available_drivers() -> list[str]:
    """Return the identifiers of every usable data-store driver."""
    names = [
        name
        for name, module in BUILTIN_DRIVERS.items()
        if importlib.util.find_spec(module) is not None
    ]
    for name in _entry_points(_config.DRIVER_ENTRY_POINT_GROUP):
        if name not in names:
            names.append(name)
    logger.info("Discovered data-store drivers: %s", ", ".join(names))
    return names


def available_auth_plugins() -> list[str]:
    """Return the identifiers of every authentication plugin."""
    names = [_config.DEFAULT_AUTH_PLUGIN]
    for name in _entry_points(_config.AUTH_ENTRY_POINT_GROUP):
        if name not in names:
            names.append(name)
    logger.info("Discovered auth plugins: %s", ", ".join(names))
    return names


def data_root_for(resolved: Mapping[str, Any]) -> Path:
    """Absolute data directory for the resolved ``dataRoot`` value."""
    root = Path(str(resolved.get("dataRoot") or "data"))
    return root if root.is_absolute() else _config.PROJECT_ROOT / root


def create_data_store(resolved: Mapping[str, Any]) -> DataStore:
    """Build (but do not connect) the store for the chosen ``dbType``."""
    driver = str(resolved.get("dbType") or "sqlite")
    data_root = data_root_for(resolved)
    plugins = _entry_points(_config.DRIVER_ENTRY_POINT_GROUP)
    if driver in plugins:
        factory = plugins[driver].load()
        return factory(resolved, data_root)
    if driver not in BUILTIN_DRIVERS:
        raise ConfigurationError(f"Unknown data-store driver '{driver}'.", context={"dbType": driver})
    from tenant_installer.backends.sql_store import SqlDataStore

    return SqlDataStore.from_config(resolved, data_root)


def create_auth_plugin(name: str, store: DataStore) -> AuthPlugin:
    if name == _config.DEFAULT_AUTH_PLUGIN:
        from tenant_installer.backends.local_auth import LocalAuthPlugin

        return LocalAuthPlugin(store)
    plugins = _entry_points(_config.AUTH_ENTRY_POINT_GROUP)
    if name not in plugins:
        raise ConfigurationError(f"Unknown auth plugin '{name}'.", context={"auth": name})
    return plugins[name].load()(store)


def create_authorization(store: DataStore) -> Authorization:
    from tenant_installer.backends.local_auth import PermissionGranter

    return PermissionGranter(store)


def create_plugin_registry(
    store: DataStore, framework_dir: Path, resolved: Mapping[str, Any]
) -> PluginRegistry:
    from tenant_installer.backends.content_plugins import FrameworkPluginRegistry

    return FrameworkPluginRegistry(store, framework_dir, data_root_for(resolved))


@dataclass
class Backends:
    """Factories used by the pipeline to build its collaborators."""

    drivers: Callable[[], list[str]] = available_drivers
    auth_plugins: Callable[[], list[str]] = available_auth_plugins
    data_store: Callable[[Mapping[str, Any]], DataStore] = create_data_store
    auth_plugin: Callable[[str, DataStore], AuthPlugin] = create_auth_plugin
    authorization: Callable[[DataStore], Authorization] = create_authorization
    plugin_registry: Callable[
        [DataStore, Path, Mapping[str, Any]], PluginRegistry
    ] = create_plugin_registry


__all__ = [
    "BUILTIN_DRIVERS",
    "Backends",
    "available_auth_plugins",
    "available_drivers",
    "create_auth_plugin",
    "create_authorization",
    "create_data_store",
    "create_plugin_registry",
    "data_root_for",
]
