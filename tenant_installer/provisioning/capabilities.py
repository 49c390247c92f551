"""Collaborator capabilities used by the installer core.

The installer never talks to a storage engine, an authentication scheme or
a package source directly. It only calls the capability surfaces declared
here as :class:`typing.Protocol` classes, so any backend providing the same
coroutine methods can be plugged in (see ``provisioning/registry.py`` for
runtime discovery and ``tenant_installer/backends`` for the reference
implementations).

All data-store and plugin methods are coroutines; the pipeline awaits each
call before moving on.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

Filter = Mapping[str, Any]


@dataclass(frozen=True)
class Tenant:
    """A tenant record as returned by the data store."""

    id: str
    name: str
    display_name: str
    is_master: bool = False
    database: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Account:
    """A user account as returned by an authentication plugin."""

    id: str
    email: str
    tenant_id: str
    password_hash: str = ""


@runtime_checkable
class DataStore(Protocol):
    """Storage capability for tenants, users and the collections they own."""

    async def connect(self) -> None: ...

    async def close(self) -> None: ...

    async def retrieve_tenant(self, filter: Filter) -> Tenant | None: ...

    async def create_tenant(self, spec: Mapping[str, Any]) -> Tenant: ...

    async def destroy(self, model_name: str, filter: Filter | None) -> None: ...

    async def get_model_names(self) -> list[str]: ...

    async def delete_user(self, filter: Filter) -> dict[str, Any] | None: ...


@runtime_checkable
class AuthPlugin(Protocol):
    """Account registration capability exposed by an authentication plugin."""

    async def register_user(self, credentials: Mapping[str, Any]) -> Account: ...


@runtime_checkable
class Authorization(Protocol):
    """Permission capability used to make an account a super user."""

    async def grant_elevated_permissions(self, account_id: str) -> None: ...


@runtime_checkable
class ContentPlugin(Protocol):
    """One content-plugin category (extension, component, theme or menu)."""

    category: str

    @property
    def manifest(self) -> dict[str, str]: ...

    def get_plugin_type(self) -> str: ...

    async def update_packages(
        self, manifest: Mapping[str, str], options: Mapping[str, Any]
    ) -> None: ...


@runtime_checkable
class PluginRegistry(Protocol):
    """Lookup of content plugins by category."""

    async def get_content_plugin(self, category: str) -> ContentPlugin: ...


__all__ = [
    "Account",
    "AuthPlugin",
    "Authorization",
    "ContentPlugin",
    "DataStore",
    "Filter",
    "PluginRegistry",
    "Tenant",
]
