"""Interactive configuration: prompt schema, collector and persistence."""

from tenant_installer.configuration.collector import collect, resolve_item
from tenant_installer.configuration.schema import (
    TENANT_ITEMS,
    USER_ITEMS,
    ConfigItemSpec,
    ResolvedConfig,
    build_config_items,
    index_menu_item,
)
from tenant_installer.configuration.store import read_env_file, save_config

__all__ = [
    "ConfigItemSpec",
    "ResolvedConfig",
    "TENANT_ITEMS",
    "USER_ITEMS",
    "build_config_items",
    "collect",
    "index_menu_item",
    "read_env_file",
    "resolve_item",
    "save_config",
]
