"""Sequential, fail-fast driver for the install steps.

``Pending -> Running(i) -> Completed | Failed``. The operator opts in
once before any step runs. Steps are awaited strictly in order and never
retried. The first exception ends the run:

- :class:`~tenant_installer.exceptions.InstallAborted` means the operator
  declined; the run ends with exit code 0 and nothing is rolled back.
- Anything else is fatal: the cause is logged and shown, the rollback
  receives the run state, and the exit code is 1.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from tenant_installer.exceptions import AppError, InstallAborted, ProvisioningError
from tenant_installer.pipeline.state import InstallContext, InstallRunState, PipelineStatus
from tenant_installer.pipeline.status import STEP_FAIL, STEP_OK, render_step_table
from tenant_installer.pipeline.steps import STEPS, TENANT_STEP, Step
from tenant_installer.provisioning.capabilities import DataStore
from tenant_installer.provisioning.rollback import rollback as default_rollback
from tenant_installer.ui import console_helpers as ch
from tenant_installer.ui.basic import ui_error, ui_header, ui_info

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

OPT_IN_PROMPT = "This will install the builder. Would you like to continue?"

Rollback = Callable[[InstallRunState, "DataStore | None", int], Awaitable[None]]


class InstallPipeline:
    r"""Runs ``steps`` against ``ctx`` and maps the outcome to an exit code.

    Parameters
    ----------
    steps : Sequence[tuple[str, Step]]
        Named steps in execution order.
    ctx : InstallContext
        Shared run context.
    rollback : callable, optional
        ``await rollback(state, store, exit_code)`` on fatal failure.

    Examples
    --------
    >>> import asyncio
    >>> from tenant_installer.pipeline.state import InstallContext
    >>> pipeline = InstallPipeline((), InstallContext(confirm=lambda *a, **k: True))
    >>> asyncio.run(pipeline.run())  # doctest: +SKIP
    0
    """

    def __init__(
        self,
        steps: Sequence[tuple[str, Step]] = STEPS,
        ctx: InstallContext | None = None,
        rollback: Rollback = default_rollback,
    ) -> None:
        self.steps = tuple(steps)
        self.ctx = ctx if ctx is not None else InstallContext()
        self.rollback = rollback
        self.outcomes: dict[str, str] = {}

    @property
    def state(self) -> InstallRunState:
        return self.ctx.state

    def _check_invariants(self, name: str) -> None:
        if name == TENANT_STEP and self.state.created_tenant is None:
            raise ProvisioningError("No master tenant was recorded after tenant provisioning.")

    async def _run_steps(self) -> None:
        for index, (name, step) in enumerate(self.steps):
            logger.info("Running step %d: %s", index, name)
            result = await step(self.ctx)
            self._check_invariants(name)
            self.outcomes[name] = result or STEP_OK
            self.state.last_completed_step = index

    async def _fail(self, name: str | None, exc: BaseException) -> int:
        self.state.status = PipelineStatus.FAILED
        if name is not None:
            self.outcomes[name] = STEP_FAIL
        if isinstance(exc, AppError):
            logger.error(
                "Install failed during %s", name or "start-up", exc_info=exc, extra={"app_error": exc.to_dict()}
            )
            ui_error(exc.message)
        else:
            logger.error("Install failed during %s", name or "start-up", exc_info=exc)
            ui_error(f"ERROR: {exc}")
        await self.rollback(self.state, self.ctx.store, EXIT_FAILURE)
        return EXIT_FAILURE

    def _current_step(self) -> str | None:
        index = self.state.last_completed_step + 1
        if 0 <= index < len(self.steps):
            return self.steps[index][0]
        return None

    async def run(self) -> int:
        """Run the pipeline and return the process exit code."""
        ui_header("Tenant installer")
        try:
            if not self.ctx.confirm(OPT_IN_PROMPT, default_yes=True):
                ui_info("Exiting install ... ")
                return EXIT_OK
        except AppError as exc:
            return await self._fail(None, exc)

        self.state.status = PipelineStatus.RUNNING
        try:
            await self._run_steps()
        except InstallAborted as aborted:
            logger.info("Install aborted by operator during %s", self._current_step())
            ui_info(aborted.message)
            return EXIT_OK
        except Exception as exc:
            return await self._fail(self._current_step(), exc)
        finally:
            await self._close_store()
            ch._RICH_CONSOLE.print(render_step_table([n for n, _ in self.steps], self.outcomes))

        self.state.status = PipelineStatus.COMPLETED
        return EXIT_OK

    async def _close_store(self) -> None:
        store = self.ctx.store
        if store is None:
            return
        try:
            await store.close()
        except Exception:
            logger.exception("Failed to close the data store")


__all__ = ["EXIT_FAILURE", "EXIT_OK", "InstallPipeline", "OPT_IN_PROMPT"]
