"""Compensation for a failed install.

Removes the master tenant created by this run and, when one was created,
the super user. Each deletion is attempted independently; a failed
deletion is logged and the rollback carries on.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tenant_installer.provisioning.capabilities import DataStore
from tenant_installer.ui.basic import ui_warning

if TYPE_CHECKING:
    from tenant_installer.pipeline.state import InstallRunState

logger = logging.getLogger(__name__)


async def rollback(state: InstallRunState, store: DataStore | None, exit_code: int) -> None:
    r"""Undo what ``state`` records, unless the run succeeded.

    Parameters
    ----------
    state : InstallRunState
        Resources created by the run.
    store : DataStore or None
        Store the resources live in; ``None`` when it was never created.
    exit_code : int
        Exit code of the run; ``0`` skips the rollback.
    """
    if exit_code == 0:
        return
    tenant = state.created_tenant
    if store is None or tenant is None:
        logger.info("Nothing to roll back")
        return

    ui_warning("Removing resources created by this install ...")
    try:
        await store.destroy("tenant", {"id": tenant.id})
        logger.info("Rolled back tenant %s", tenant.id)
    except Exception:
        logger.exception("Failed to remove tenant %s", tenant.id)

    account = state.created_super_user
    if account is None:
        return
    try:
        await store.destroy("user", {"id": account.id})
        logger.info("Rolled back user %s", account.id)
    except Exception:
        logger.exception("Failed to remove user %s", account.id)


__all__ = ["rollback"]
