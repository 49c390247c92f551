"""The install steps, in the order the pipeline runs them.

Every step is ``async def step(ctx) -> str | None``. Returning moves the
pipeline on; raising fails the install. A step may return a status key
from :mod:`tenant_installer.pipeline.status` to report a non-fatal
problem (only the front-end build does).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from tenant_installer import config as _config
from tenant_installer.configuration.collector import collect
from tenant_installer.configuration.schema import (
    TENANT_ITEMS,
    USER_ITEMS,
    build_config_items,
)
from tenant_installer.configuration.store import read_env_file, save_config
from tenant_installer.exceptions import ProvisioningError
from tenant_installer.pipeline.framework import fetch_framework
from tenant_installer.pipeline.run import run_build
from tenant_installer.pipeline.state import InstallContext
from tenant_installer.pipeline.status import STEP_WARN
from tenant_installer.provisioning.tenant import provision_tenant
from tenant_installer.provisioning.user import provision_super_user
from tenant_installer.ui.basic import (
    ui_info,
    ui_plain,
    ui_rule,
    ui_status,
    ui_success,
    ui_warning,
)

logger = logging.getLogger(__name__)

Step = Callable[[InstallContext], Awaitable["str | None"]]

# Keys never echoed back in the final summary.
SECRET_KEYS = frozenset({"dbPass", "sessionSecret", "smtpPassword"})


async def framework_fetch(ctx: InstallContext) -> None:
    ui_rule("Framework")
    with ui_status("Downloading the framework, please wait a moment ..."):
        count = await fetch_framework(ctx.framework_url, ctx.framework_dir)
    ui_success(f"Framework installed ({count} files).")


async def configuration_collection(ctx: InstallContext) -> None:
    ui_rule("Configuration")
    ui_info(
        "You will now be prompted to set configuration items. "
        "Just press enter to accept the default."
    )
    items = build_config_items(ctx.drivers, ctx.auth_plugins)
    ctx.resolved.update(collect(items, ask=ctx.ask, ask_secret=ctx.ask_secret))
    save_config(ctx.resolved)


async def connect_collaborators(ctx: InstallContext) -> None:
    """Build and connect the store and the plugins chosen in the configuration."""
    backends = ctx.backends
    if ctx.store is None:
        ctx.store = backends.data_store(ctx.resolved)
        await ctx.store.connect()
    if ctx.auth_plugin is None:
        auth_name = ctx.resolved.get("auth") or _config.DEFAULT_AUTH_PLUGIN
        ctx.auth_plugin = backends.auth_plugin(auth_name, ctx.store)
    if ctx.authorization is None:
        ctx.authorization = backends.authorization(ctx.store)
    if ctx.plugin_registry is None:
        ctx.plugin_registry = backends.plugin_registry(
            ctx.store, ctx.framework_dir, ctx.resolved
        )


async def tenant_provisioning(ctx: InstallContext) -> None:
    ui_rule("Master tenant")
    with ui_status("Checking configuration, please wait a moment ..."):
        await connect_collaborators(ctx)
    ui_info("You will now be prompted to enter details for the master tenant.")
    answers = collect(TENANT_ITEMS, ask=ctx.ask, ask_secret=ctx.ask_secret)
    await provision_tenant(ctx, answers["name"], answers["displayName"])


async def content_plugin_installation(ctx: InstallContext) -> None:
    tenant = ctx.state.created_tenant
    if tenant is None or ctx.plugin_registry is None:
        raise ProvisioningError("Content plugins need a master tenant.")
    ui_rule("Content plugins")
    for category in _config.CONTENT_PLUGIN_CATEGORIES:
        plugin = await ctx.plugin_registry.get_content_plugin(category)
        ui_plain(f"  installing {plugin.get_plugin_type()} plugins")
        await plugin.update_packages(
            plugin.manifest, {"tenant_id": tenant.id, "skip_tenant_copy": True}
        )


async def user_provisioning(ctx: InstallContext) -> None:
    ui_rule("Super user")
    ui_info(
        "Create the super user account. This account can be used to manage "
        "everything on your instance."
    )
    answers = collect(USER_ITEMS, ask=ctx.ask, ask_secret=ctx.ask_secret)
    await provision_super_user(ctx, answers["email"], answers["password"])


async def frontend_build(ctx: InstallContext) -> str | None:
    ui_rule("Front end")
    ui_info("Compiling the front end application, please wait a moment ...")
    command = " ".join(ctx.build_command)
    if run_build(ctx.build_command, ctx.framework_dir):
        ui_success("The front end application was compiled.")
        return None
    ui_warning(
        f"{command} failed. Is the build tool installed? "
        "You can install it with 'npm install' in the framework directory."
    )
    ui_warning(f"Install will continue. Try running '{command}' after installation completes.")
    return STEP_WARN


async def finalize(ctx: InstallContext) -> None:
    ui_rule("Done")
    persisted = read_env_file()
    for key, value in persisted.items():
        shown = "********" if key in SECRET_KEYS and value else value
        ui_plain(f"  {key} = {shown}")
    ui_success("Installation complete.")
    ui_info("Run the command 'npm start' to start your instance.")


STEPS: tuple[tuple[str, Step], ...] = (
    ("framework-fetch", framework_fetch),
    ("configuration-collection", configuration_collection),
    ("tenant-provisioning", tenant_provisioning),
    ("content-plugin-installation", content_plugin_installation),
    ("user-provisioning", user_provisioning),
    ("front-end-build", frontend_build),
    ("finalize", finalize),
)

TENANT_STEP = "tenant-provisioning"


__all__ = [
    "STEPS",
    "SECRET_KEYS",
    "Step",
    "TENANT_STEP",
    "configuration_collection",
    "connect_collaborators",
    "content_plugin_installation",
    "finalize",
    "framework_fetch",
    "frontend_build",
    "tenant_provisioning",
    "user_provisioning",
]
