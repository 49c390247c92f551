"""Global configuration constants for the installer.

Defines paths, filenames and fixed values used across the pipeline,
provisioning and UI modules.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path.cwd()
CONF_DIR: Path = PROJECT_ROOT / "conf"
LOG_DIR: Path = PROJECT_ROOT / "logs"
FRAMEWORK_DIR: Path = PROJECT_ROOT / "framework"

# Persisted configuration documents
ENV_PATH: Path = PROJECT_ROOT / ".env"
CONFIG_JSON_PATH: Path = CONF_DIR / "config.json"

# Framework source archive (zip); overridable for mirrors and offline installs
FRAMEWORK_ARCHIVE_URL: str = os.environ.get(
    "FRAMEWORK_ARCHIVE_URL",
    "https://github.com/adaptlearning/adapt_framework/archive/refs/heads/master.zip",
)

# Front-end build tool invocation
BUILD_COMMAND: tuple[str, ...] = ("npm", "run", "build")

# Content plugin categories, installed in this order
CONTENT_PLUGIN_CATEGORIES: tuple[str, ...] = ("extension", "component", "theme", "menu")

# Runtime capability discovery
DRIVER_ENTRY_POINT_GROUP: str = "tenant_installer.drivers"
AUTH_ENTRY_POINT_GROUP: str = "tenant_installer.auth"
DEFAULT_AUTH_PLUGIN: str = "local"

# Logging
LOG_FILENAME_INSTALL: str = "install.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
