"""Content-plugin registry backed by the downloaded framework source.

Each category (``extension``, ``component``, ``theme``, ``menu``) is read
from ``<framework>/src/<category>s/<package>/package.json``. The manifest
of a category maps package name to version. Installing a manifest records
one ``contentpackage`` row per package for the tenant and, unless asked to
skip it, copies the package sources into the tenant's data directory.
"""

from __future__ import annotations

import json
import logging
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from tenant_installer import config as _config
from tenant_installer.backends.sql_store import SqlDataStore
from tenant_installer.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


def _read_package(package_json: Path) -> tuple[str, str]:
    try:
        with package_json.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise ExternalServiceError(
            f"Unreadable plugin manifest {package_json}.",
            context={"path": str(package_json)},
            transient=False,
        ) from exc
    name = data.get("name") or package_json.parent.name
    return str(name), str(data.get("version") or "0.0.0")


class FrameworkContentPlugin:
    """All packages of one category found in the framework source tree."""

    def __init__(
        self,
        store: SqlDataStore,
        category: str,
        framework_dir: Path,
        data_root: Path,
    ) -> None:
        self.store = store
        self.category = category
        self.framework_dir = Path(framework_dir)
        self.data_root = Path(data_root)
        self._sources: dict[str, Path] | None = None
        self._manifest: dict[str, str] = {}

    @property
    def source_dir(self) -> Path:
        return self.framework_dir / "src" / f"{self.category}s"

    def _scan(self) -> None:
        self._sources = {}
        self._manifest = {}
        if not self.source_dir.is_dir():
            logger.info("No %s directory under %s", self.category, self.framework_dir)
            return
        for package_json in sorted(self.source_dir.glob("*/package.json")):
            name, version = _read_package(package_json)
            self._manifest[name] = version
            self._sources[name] = package_json.parent

    @property
    def manifest(self) -> dict[str, str]:
        if self._sources is None:
            self._scan()
        return dict(self._manifest)

    def get_plugin_type(self) -> str:
        return self.category

    async def update_packages(
        self, manifest: Mapping[str, str], options: Mapping[str, Any]
    ) -> None:
        r"""Record (and optionally copy) every package in ``manifest``.

        Parameters
        ----------
        manifest : Mapping[str, str]
            Package name to version.
        options : Mapping[str, Any]
            ``tenant_id`` (required) and ``skip_tenant_copy`` (bool).

        Raises
        ------
        ExternalServiceError
            If no tenant is given or a package is not part of this category.
        """
        tenant_id = options.get("tenant_id")
        if not tenant_id:
            raise ExternalServiceError(
                f"Cannot install {self.category} packages without a tenant.",
                transient=False,
            )
        if self._sources is None:
            self._scan()
        unknown = sorted(set(manifest) - set(self._sources or {}))
        if unknown:
            raise ExternalServiceError(
                f"Unknown {self.category} packages: {', '.join(unknown)}",
                context={"category": self.category},
                transient=False,
            )

        await self.store.destroy(
            "contentpackage", {"tenant_id": tenant_id, "category": self.category}
        )
        for name, version in manifest.items():
            await self.store.create(
                "contentpackage",
                {
                    "tenant_id": tenant_id,
                    "category": self.category,
                    "name": name,
                    "version": version,
                },
            )
            if not options.get("skip_tenant_copy"):
                target = self.data_root / str(tenant_id) / f"{self.category}s" / name
                shutil.copytree(self._sources[name], target, dirs_exist_ok=True)
        logger.info("Installed %d %s package(s)", len(manifest), self.category)


class FrameworkPluginRegistry:
    """Hands out one :class:`FrameworkContentPlugin` per category."""

    def __init__(self, store: SqlDataStore, framework_dir: Path, data_root: Path) -> None:
        self.store = store
        self.framework_dir = Path(framework_dir)
        self.data_root = Path(data_root)
        self._plugins: dict[str, FrameworkContentPlugin] = {}

    async def get_content_plugin(self, category: str) -> FrameworkContentPlugin:
        if category not in _config.CONTENT_PLUGIN_CATEGORIES:
            raise ExternalServiceError(
                f"Unknown content plugin category '{category}'.",
                context={"category": category},
                transient=False,
            )
        if category not in self._plugins:
            self._plugins[category] = FrameworkContentPlugin(
                self.store, category, self.framework_dir, self.data_root
            )
        return self._plugins[category]


__all__ = ["FrameworkContentPlugin", "FrameworkPluginRegistry"]
