"""Super-user provisioning for the master tenant."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tenant_installer.exceptions import ProvisioningError
from tenant_installer.provisioning.capabilities import Account
from tenant_installer.ui.basic import ui_success

if TYPE_CHECKING:
    from tenant_installer.pipeline.state import InstallContext

logger = logging.getLogger(__name__)


async def provision_super_user(ctx: InstallContext, email: str, password: str) -> Account:
    r"""Register ``email`` on the master tenant and grant it super-user rights.

    Any account already registered under ``email`` is removed first. The
    new account is recorded in ``ctx.state`` before the grant so a failed
    grant still rolls it back.

    Raises
    ------
    ProvisioningError
        If removal, registration or the grant fails; the cause is chained.
    """
    store = ctx.require_store()
    tenant = ctx.state.created_tenant
    if tenant is None or ctx.auth_plugin is None or ctx.authorization is None:
        raise ProvisioningError("Super user cannot be created before the master tenant.")

    try:
        removed = await store.delete_user({"email": email})
        if removed:
            logger.info("Removed existing user %s", email)
        account = await ctx.auth_plugin.register_user(
            {"email": email, "password": password, "tenant_id": tenant.id}
        )
        ctx.state.created_super_user = account
        await ctx.authorization.grant_elevated_permissions(account.id)
    except ProvisioningError:
        raise
    except Exception as exc:
        raise ProvisioningError(
            f"Failed to create super user: {exc}", context={"email": email}
        ) from exc

    ui_success("Super user created.")
    return account


__all__ = ["provision_super_user"]
