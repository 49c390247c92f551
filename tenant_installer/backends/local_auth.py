"""Local (password) authentication plugin and permission granter.

Accounts are stored in the ``user`` table of a :class:`SqlDataStore` with
a passlib ``pbkdf2_sha256`` hash. The super-user grant is a ``super``
row in ``rolemapping``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from passlib.context import CryptContext

from tenant_installer.backends.sql_store import SqlDataStore
from tenant_installer.exceptions import ProvisioningError
from tenant_installer.provisioning.capabilities import Account

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

SUPER_ROLE = "super"

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+$")


class LocalAuthPlugin:
    """Registers accounts with a locally stored password hash."""

    name = "local"

    def __init__(self, store: SqlDataStore) -> None:
        self.store = store

    async def register_user(self, credentials: Mapping[str, Any]) -> Account:
        r"""Create an account from ``email``, ``password`` and ``tenant_id``.

        Raises
        ------
        ProvisioningError
            If the email is malformed, the password is empty, no tenant is
            given, or the email is already registered.
        """
        email = str(credentials.get("email") or "").strip()
        password = str(credentials.get("password") or "")
        tenant_id = credentials.get("tenant_id")
        if not _EMAIL.match(email):
            raise ProvisioningError("A valid email address is required.", context={"email": email})
        if not password:
            raise ProvisioningError("A password is required.", context={"email": email})
        if not tenant_id:
            raise ProvisioningError("A tenant is required to register a user.", context={"email": email})
        if await self.store.retrieve("user", {"email": email}):
            raise ProvisioningError("User already registered.", context={"email": email})

        row = await self.store.create(
            "user",
            {
                "email": email,
                "password_hash": pwd_context.hash(password),
                "tenant_id": str(tenant_id),
            },
        )
        logger.info("Registered user %s on tenant %s", email, tenant_id)
        return Account(
            id=row["id"],
            email=email,
            tenant_id=str(tenant_id),
            password_hash=row["password_hash"],
        )


class PermissionGranter:
    """Grants the ``super`` role to an account."""

    def __init__(self, store: SqlDataStore) -> None:
        self.store = store

    async def grant_elevated_permissions(self, account_id: str) -> None:
        if not await self.store.retrieve("user", {"id": account_id}):
            raise ProvisioningError(
                "Cannot grant permissions to an unknown user.",
                context={"account_id": account_id},
            )
        await self.store.destroy("rolemapping", {"user_id": account_id})
        await self.store.create("rolemapping", {"user_id": account_id, "role": SUPER_ROLE})
        logger.info("Granted %s role to %s", SUPER_ROLE, account_id)


__all__ = ["LocalAuthPlugin", "PermissionGranter", "SUPER_ROLE", "pwd_context"]
