"""Run state shared by the pipeline steps.

:class:`InstallRunState` records what the run has created so the rollback
can undo it. :class:`InstallContext` is the single object passed to every
step; nothing about the run lives in module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from tenant_installer import config as _config
from tenant_installer.configuration.schema import ResolvedConfig
from tenant_installer.provisioning.capabilities import (
    Account,
    AuthPlugin,
    Authorization,
    DataStore,
    PluginRegistry,
    Tenant,
)
from tenant_installer.provisioning.registry import Backends
from tenant_installer.ui import prompts


class PipelineStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class InstallRunState:
    """Resources created by this run and how far it got."""

    created_tenant: Tenant | None = None
    created_super_user: Account | None = None
    last_completed_step: int = -1
    status: PipelineStatus = PipelineStatus.PENDING


@dataclass
class InstallContext:
    r"""Everything a step needs: state, configuration and collaborators.

    Attributes
    ----------
    state : InstallRunState
        Created resources and progress.
    resolved : ResolvedConfig
        The collected configuration; filled by the configuration step.
    drivers, auth_plugins : list[str]
        Identifiers discovered at start-up.
    store, auth_plugin, authorization, plugin_registry
        Collaborators built once the configuration is known.
    ask, ask_secret, confirm : callable
        Prompt functions.
    backends : Backends
        Factories for the collaborators.
    framework_dir : Path
        Local copy of the framework source.
    framework_url : str
        Archive downloaded by the framework step.
    build_command : tuple[str, ...]
        Front-end build invocation.
    """

    state: InstallRunState = field(default_factory=InstallRunState)
    resolved: ResolvedConfig = field(default_factory=dict)
    drivers: list[str] = field(default_factory=list)
    auth_plugins: list[str] = field(default_factory=list)
    store: DataStore | None = None
    auth_plugin: AuthPlugin | None = None
    authorization: Authorization | None = None
    plugin_registry: PluginRegistry | None = None
    ask: Callable[[str, str | None], str] = prompts.ask_text
    ask_secret: Callable[[str], str] = prompts.ask_secret
    confirm: Callable[..., bool] = prompts.ask_confirm
    backends: Backends = field(default_factory=Backends)
    framework_dir: Path = field(default_factory=lambda: _config.FRAMEWORK_DIR)
    framework_url: str = field(default_factory=lambda: _config.FRAMEWORK_ARCHIVE_URL)
    build_command: tuple[str, ...] = field(default_factory=lambda: _config.BUILD_COMMAND)

    def require_store(self) -> DataStore:
        if self.store is None:
            raise RuntimeError("Data store has not been created yet")
        return self.store


__all__ = ["InstallContext", "InstallRunState", "PipelineStatus"]
