"""Master tenant provisioning.

If a tenant with the requested name, or any other master tenant, already
exists the operator is warned that *every* collection will be emptied and
asked to confirm, so the store never holds more than one master tenant.
Declining ends the install cleanly
(:class:`~tenant_installer.exceptions.InstallAborted`) without touching the
store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tenant_installer.configuration.store import save_config
from tenant_installer.exceptions import InstallAborted, ProvisioningError
from tenant_installer.provisioning.capabilities import DataStore, Tenant
from tenant_installer.ui.basic import ui_success, ui_warning

if TYPE_CHECKING:
    from tenant_installer.pipeline.state import InstallContext

logger = logging.getLogger(__name__)


async def delete_collections(store: DataStore) -> None:
    """Empty every collection the store knows about, one after another."""
    for model_name in await store.get_model_names():
        logger.warning("Deleting all records from %s", model_name)
        await store.destroy(model_name, None)


def database_binding(resolved: dict[str, Any]) -> dict[str, Any]:
    return {
        "db_name": resolved.get("dbName"),
        "db_host": resolved.get("dbHost"),
        "db_user": resolved.get("dbUser"),
        "db_pass": resolved.get("dbPass"),
        "db_port": resolved.get("dbPort"),
    }


async def provision_tenant(ctx: InstallContext, name: str, display_name: str) -> Tenant:
    r"""Create the master tenant, resetting the store if it already exists.

    Parameters
    ----------
    ctx : InstallContext
        Run context; ``ctx.store`` must be connected.
    name : str
        Unique tenant name.
    display_name : str
        Human readable tenant name.

    Returns
    -------
    Tenant
        The newly created master tenant (also recorded in ``ctx.state``).

    Raises
    ------
    InstallAborted
        If the operator declines the reset.
    ProvisioningError
        If the store does not return a tenant.
    """
    store = ctx.require_store()
    existing = await store.retrieve_tenant({"name": name})
    if existing is None:
        existing = await store.retrieve_tenant({"is_master": True})
    if existing:
        if existing.name != name:
            ui_warning(f"Master tenant '{existing.name}' already exists. It will be deleted.")
        else:
            ui_warning("Tenant already exists. It will be deleted.")
        if not ctx.confirm("Continue?", default_yes=True):
            raise InstallAborted()
        await delete_collections(store)
        logger.info("Removed existing tenant %s and all collections", existing.name)

    tenant = await store.create_tenant(
        {
            "name": name,
            "display_name": display_name,
            "is_master": True,
            "database": database_binding(ctx.resolved),
        }
    )
    if not tenant:
        raise ProvisioningError("Failed to create master tenant.", context={"name": name})

    ctx.state.created_tenant = tenant
    ctx.resolved["masterTenantName"] = tenant.name
    ctx.resolved["masterTenantId"] = tenant.id
    save_config(ctx.resolved)

    ui_success("Master tenant created.")
    return tenant


__all__ = ["database_binding", "delete_collections", "provision_tenant"]
