"""Reference collaborators: SQL data store, local auth and content plugins."""

from tenant_installer.backends.content_plugins import (
    FrameworkContentPlugin,
    FrameworkPluginRegistry,
)
from tenant_installer.backends.local_auth import LocalAuthPlugin, PermissionGranter
from tenant_installer.backends.sql_store import SqlDataStore, build_url

__all__ = [
    "FrameworkContentPlugin",
    "FrameworkPluginRegistry",
    "LocalAuthPlugin",
    "PermissionGranter",
    "SqlDataStore",
    "build_url",
]
