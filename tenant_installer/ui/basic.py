"""Minimal UI output primitives for the installer terminal interface.

This module renders headers, rules, status spinners and the informational,
warning, success and error messages shown to the operator. It contains no
logic beyond rendering: pipeline steps and provisioning code call these
helpers and never talk to Rich directly.

Messages are escaped before styling so that text coming from collaborators
(error messages, tenant names, subprocess output) cannot inject Rich markup.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from tenant_installer.ui import console_helpers as ch


def ui_rule(title: str) -> None:
    r"""Render a horizontal rule with a section title.

    Parameters
    ----------
    title : str
        Title text to display as the rule caption.

    Examples
    --------
    >>> ui_rule("Master tenant")
    # Displays a blue rule captioned "Master tenant".
    """
    ch._RICH_CONSOLE.print(ch.Rule(ch.escape(title), style="bold blue"))


def ui_header(title: str) -> None:
    r"""Render a prominent banner.

    Parameters
    ----------
    title : str
        Banner text to display.

    See Also
    --------
    ui_rule
    """
    ch._RICH_CONSOLE.print(
        ch.Panel.fit(ch.escape(title), style="bold white on blue", border_style="blue")
    )


@contextmanager
def ui_status(message: str) -> Iterator[None]:
    r"""Show a spinner with ``message`` while the body of the context runs.

    Parameters
    ----------
    message : str
        Status text shown for the duration of the context.

    Examples
    --------
    >>> with ui_status("Checking configuration, please wait a moment ..."):
    ...     pass
    """
    with ch._RICH_CONSOLE.status(ch.escape(message), spinner="dots"):
        yield


def ui_info(message: str) -> None:
    """Display an informational message in cyan."""
    ch.rprint(f"[cyan]{ch.escape(message)}[/cyan]")


def ui_success(message: str) -> None:
    r"""Display a success message with a green check mark.

    Parameters
    ----------
    message : str
        Text of the success message to display.

    See Also
    --------
    ui_info, ui_error
    """
    ch.rprint(f"[green]✓ {ch.escape(message)}[/green]")


def ui_warning(message: str) -> None:
    r"""Display a warning message in yellow.

    Used for recoverable issues: rejected prompt answers, a failed
    front-end build, or a destructive action about to happen.

    Parameters
    ----------
    message : str
        Warning text.
    """
    ch.rprint(f"[yellow]⚠ {ch.escape(message)}[/yellow]")


def ui_error(message: str) -> None:
    r"""Display an error message in bold red.

    Parameters
    ----------
    message : str
        Error text.

    See Also
    --------
    ui_warning, ui_success
    """
    ch.rprint(f"[bold red]✗ {ch.escape(message)}[/bold red]")


def ui_plain(message: str) -> None:
    """Echo ``message`` verbatim, without styling."""
    ch.rprint(ch.escape(message))


__all__ = [
    "ui_error",
    "ui_header",
    "ui_info",
    "ui_plain",
    "ui_rule",
    "ui_status",
    "ui_success",
    "ui_warning",
]
