"""Tenant and super-user provisioning, rollback and collaborator discovery."""

from tenant_installer.provisioning.capabilities import (
    Account,
    AuthPlugin,
    Authorization,
    ContentPlugin,
    DataStore,
    PluginRegistry,
    Tenant,
)

__all__ = [
    "Account",
    "AuthPlugin",
    "Authorization",
    "ContentPlugin",
    "DataStore",
    "PluginRegistry",
    "Tenant",
]
