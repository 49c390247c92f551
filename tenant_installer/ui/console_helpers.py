"""console_helpers.py: Rich and Questionary integration for the installer terminal UI.

This module is the single place where the Rich and Questionary packages are
imported. Everything else in the installer renders and prompts through the
names re-exported here, which keeps the third-party surface small and lets
tests monkeypatch one module.

Features
--------
- Exposes ``rprint`` as the canonical primitive for styled terminal output.
- Re-exports the Rich renderables used by the installer (``Panel``,
  ``Rule``, ``Table``) and a shared ``Console``.
- Exposes ``questionary`` for interactive prompts and ``stdin_is_interactive``
  to decide when a full-screen prompt can be used.

Canonical Usage
---------------
>>> from tenant_installer.ui.console_helpers import rprint
>>> rprint("[green]Hello[/green]")
Hello

References
----------
- Rich Docs: https://rich.readthedocs.io/en/latest/
- Questionary Docs: https://github.com/tmbo/questionary

"""

from __future__ import annotations

import sys
from typing import IO, Any

import questionary
from rich import print as rich_print
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

_RICH_CONSOLE: Console = Console()


def stdin_is_interactive() -> bool:
    r"""Return True when standard input is attached to a terminal.

    Questionary needs a real TTY to draw its prompts. Piped input (scripts,
    CI, tests feeding ``input()``) must use the line-based prompts instead.

    Returns
    -------
    bool
        True if ``sys.stdin`` reports itself as a TTY.

    Examples
    --------
    >>> stdin_is_interactive() in (True, False)
    True
    """
    isatty = getattr(sys.stdin, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


def rprint(
    *objects: Any,
    sep: str = " ",
    end: str = "\n",
    file: IO[str] | None = None,
    flush: bool = False,
) -> None:
    r"""Print objects to the terminal through Rich.

    All parameters mirror Python's builtin print. Rich markup such as
    ``[red]...[/red]`` is rendered.

    Parameters
    ----------
    *objects : Any
        Objects to be printed, separated by sep.
    sep : str, optional
        Separator between objects, default ' '.
    end : str, optional
        Line ending, default newline.
    file : IO[str], optional
        File-like object to print to, default sys.stdout.
    flush : bool, optional
        Forcibly flush output.

    Examples
    --------
    >>> import io
    >>> buf = io.StringIO()
    >>> rprint("FileOut", file=buf)
    >>> "FileOut" in buf.getvalue()
    True
    """
    rich_print(*objects, sep=sep, end=end, file=file, flush=flush)


__all__ = [
    "_RICH_CONSOLE",
    "Console",
    "Panel",
    "Rule",
    "Table",
    "escape",
    "questionary",
    "rprint",
    "stdin_is_interactive",
]
