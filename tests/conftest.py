"""Pytest configuration and shared fakes.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides in-memory collaborators implementing the capability protocols.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tenant_installer import config as cfg  # noqa: E402
from tenant_installer.provisioning.capabilities import Account, Tenant  # noqa: E402


def _matches(record: dict[str, Any], filter: Any) -> bool:
    return all(record.get(key) == value for key, value in (filter or {}).items())


class FakeStore:
    """Dictionary-backed data store recording every destructive call."""

    model_names = ["tenant", "user", "rolemapping", "contentpackage", "asset"]

    def __init__(self) -> None:
        self.records: dict[str, list[dict[str, Any]]] = {m: [] for m in self.model_names}
        self.calls: list[tuple[str, Any, Any]] = []
        self.failures: dict[str, Exception] = {}
        self.create_returns_none = False
        self.connected = False
        self.closed = False
        self._ids = 0

    def _next_id(self) -> str:
        self._ids += 1
        return f"id{self._ids}"

    def _maybe_fail(self, name: str) -> None:
        if name in self.failures:
            raise self.failures[name]

    def add_tenant(self, name: str, display_name: str = "Existing") -> Tenant:
        record = {"id": self._next_id(), "name": name, "display_name": display_name, "is_master": True}
        self.records["tenant"].append(record)
        return Tenant(id=record["id"], name=name, display_name=display_name, is_master=True)

    def add_user(self, email: str, tenant_id: str = "t0") -> dict[str, Any]:
        record = {"id": self._next_id(), "email": email, "tenant_id": tenant_id}
        self.records["user"].append(record)
        return record

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.closed = True

    async def retrieve_tenant(self, filter: Any) -> Tenant | None:
        self._maybe_fail("retrieve_tenant")
        for record in self.records["tenant"]:
            if _matches(record, filter):
                return Tenant(
                    id=record["id"],
                    name=record["name"],
                    display_name=record["display_name"],
                    is_master=record["is_master"],
                )
        return None

    async def create_tenant(self, spec: Any) -> Tenant | None:
        self._maybe_fail("create_tenant")
        if self.create_returns_none:
            return None
        record = {"id": self._next_id(), **spec}
        self.records["tenant"].append(record)
        return Tenant(
            id=record["id"],
            name=spec["name"],
            display_name=spec["display_name"],
            is_master=spec["is_master"],
            database=dict(spec.get("database") or {}),
        )

    async def destroy(self, model_name: str, filter: Any) -> None:
        self.calls.append(("destroy", model_name, filter))
        self._maybe_fail(f"destroy:{model_name}")
        self.records[model_name] = [
            r for r in self.records[model_name] if filter is not None and not _matches(r, filter)
        ]

    async def get_model_names(self) -> list[str]:
        return list(self.model_names)

    async def delete_user(self, filter: Any) -> dict[str, Any] | None:
        self.calls.append(("delete_user", "user", filter))
        self._maybe_fail("delete_user")
        for record in self.records["user"]:
            if _matches(record, filter):
                self.records["user"].remove(record)
                return record
        return None


class FakeAuth:
    def __init__(self, store: FakeStore, error: Exception | None = None) -> None:
        self.store = store
        self.error = error
        self.registered: list[dict[str, Any]] = []

    async def register_user(self, credentials: Any) -> Account:
        if self.error is not None:
            raise self.error
        self.registered.append(dict(credentials))
        record = self.store.add_user(credentials["email"], credentials["tenant_id"])
        return Account(id=record["id"], email=record["email"], tenant_id=record["tenant_id"])


class FakeAuthorization:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.granted: list[str] = []

    async def grant_elevated_permissions(self, account_id: str) -> None:
        if self.error is not None:
            raise self.error
        self.granted.append(account_id)


class FakePlugin:
    def __init__(self, category: str, error: Exception | None = None) -> None:
        self.category = category
        self.error = error
        self.updates: list[tuple[dict[str, str], dict[str, Any]]] = []

    @property
    def manifest(self) -> dict[str, str]:
        return {f"adapt-{self.category}": "1.0.0"}

    def get_plugin_type(self) -> str:
        return self.category

    async def update_packages(self, manifest: Any, options: Any) -> None:
        if self.error is not None:
            raise self.error
        self.updates.append((dict(manifest), dict(options)))


class FakeRegistry:
    def __init__(self, failing: dict[str, Exception] | None = None) -> None:
        failing = failing or {}
        self.plugins = {c: FakePlugin(c, failing.get(c)) for c in cfg.CONTENT_PLUGIN_CATEGORIES}
        self.requested: list[str] = []

    async def get_content_plugin(self, category: str) -> FakePlugin:
        self.requested.append(category)
        return self.plugins[category]


@pytest.fixture
def project_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every project path constant at ``tmp_path``."""
    monkeypatch.setattr(cfg, "PROJECT_ROOT", tmp_path)
    monkeypatch.setattr(cfg, "CONF_DIR", tmp_path / "conf")
    monkeypatch.setattr(cfg, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(cfg, "FRAMEWORK_DIR", tmp_path / "framework")
    monkeypatch.setattr(cfg, "ENV_PATH", tmp_path / ".env")
    monkeypatch.setattr(cfg, "CONFIG_JSON_PATH", tmp_path / "conf" / "config.json")
    return tmp_path


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fake_registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def make_context(project_paths: Path, fake_store: FakeStore, fake_registry: FakeRegistry):
    """Build an ``InstallContext`` wired to the fakes; keyword overrides win."""
    from tenant_installer.pipeline.state import InstallContext

    def _make(**overrides: Any) -> InstallContext:
        values: dict[str, Any] = {
            "store": fake_store,
            "auth_plugin": FakeAuth(fake_store),
            "authorization": FakeAuthorization(),
            "plugin_registry": fake_registry,
            "drivers": ["sqlite"],
            "auth_plugins": ["local"],
            "resolved": {"dbName": "tenant-master", "dbHost": "localhost", "dbPort": 27017},
            "confirm": lambda prompt, default_yes=True: True,
        }
        values.update(overrides)
        return InstallContext(**values)

    return _make


def scripted_prompts(answers: dict[str, str] | None = None, secrets: dict[str, str] | None = None):
    """Return ``(ask, ask_secret)`` answering by prompt text; unknown prompts take the default."""
    answers = answers or {}
    secrets = secrets or {}
    asked: list[str] = []

    def ask(prompt: str, default: str | None = None) -> str:
        asked.append(prompt)
        return answers.get(prompt, "") or (default or "")

    def ask_secret(prompt: str) -> str:
        asked.append(prompt)
        return secrets.get(prompt, "")

    ask.asked = asked  # type: ignore[attr-defined]
    return ask, ask_secret


@pytest.fixture
def fakes() -> SimpleNamespace:
    """The fake collaborator classes and the scripted prompt builder."""
    return SimpleNamespace(
        FakeAuth=FakeAuth,
        FakeAuthorization=FakeAuthorization,
        FakePlugin=FakePlugin,
        FakeRegistry=FakeRegistry,
        FakeStore=FakeStore,
        scripted_prompts=scripted_prompts,
    )
