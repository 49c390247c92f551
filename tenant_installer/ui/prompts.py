"""Prompt interaction helpers for the interactive installer.

The installer is entirely interactive: every configuration value, the
tenant and administrator details and both confirmations are read through
the three helpers in this module.

Two input paths exist. When standard input is a terminal the prompts are
drawn with Questionary; otherwise (piped answers, scripted installs, the
test-suite) a plain ``input()`` line is read. In both paths the end of
input is unrecoverable: a cancelled Questionary prompt or ``EOFError``
raises :class:`~tenant_installer.exceptions.UserInputError`, which the
pipeline treats as a fatal step failure.

See Also
--------
- ``tenant_installer/configuration/collector.py``: schema-driven prompting
- ``tenant_installer/exceptions.py``: error taxonomy
"""

from __future__ import annotations

import getpass

from tenant_installer.exceptions import UserInputError
from tenant_installer.ui import console_helpers as ch

_YES = ("y", "yes")


def _read_line(prompt: str, *, hidden: bool = False) -> str:
    """Read one raw line from stdin, mapping end of input to ``UserInputError``."""
    try:
        if hidden and ch.stdin_is_interactive():
            return getpass.getpass(prompt)
        return input(prompt)
    except (EOFError, OSError) as exc:
        raise UserInputError(
            "Input ended before the prompt was answered.",
            context={"prompt": prompt},
        ) from exc


def ask_text(prompt: str, default: str | None = None) -> str:
    r"""Prompt the operator for a line of text.

    Parameters
    ----------
    prompt : str
        The user-facing prompt string.
    default : str or None, optional
        Value returned when the operator submits an empty answer.

    Returns
    -------
    str
        The stripped answer, or ``default`` (or ``""``) if the answer was empty.

    Raises
    ------
    UserInputError
        If input ends (EOF) or the prompt is cancelled.

    Examples
    --------
    >>> import builtins
    >>> builtins.input = lambda _p: ""
    >>> ask_text("Server name", default="localhost")
    'localhost'
    """
    if ch.stdin_is_interactive():
        answer = ch.questionary.text(prompt, default=default or "").ask()
        if answer is None:
            raise UserInputError("Prompt was cancelled.", context={"prompt": prompt})
    else:
        suffix = f" [{default}]" if default not in (None, "") else ""
        answer = _read_line(f"> {prompt}{suffix} ")
    return answer.strip() or (default or "")


def ask_secret(prompt: str) -> str:
    r"""Prompt the operator for a value that must not be echoed.

    Parameters
    ----------
    prompt : str
        The user-facing prompt string.

    Returns
    -------
    str
        The answer with surrounding whitespace removed (may be empty).

    Raises
    ------
    UserInputError
        If input ends (EOF) or the prompt is cancelled.
    """
    if ch.stdin_is_interactive():
        answer = ch.questionary.password(prompt).ask()
        if answer is None:
            raise UserInputError("Prompt was cancelled.", context={"prompt": prompt})
        return answer.strip()
    return _read_line(f"> {prompt} ", hidden=True).strip()


def ask_confirm(prompt: str, default_yes: bool = True) -> bool:
    r"""Ask a yes/no question.

    An empty answer selects the default. Any other answer is affirmative
    only when it is ``y`` or ``yes`` (case-insensitive).

    Parameters
    ----------
    prompt : str
        The question to present.
    default_yes : bool, optional
        Whether an empty answer means yes (default: True).

    Returns
    -------
    bool
        True when the operator confirmed.

    Raises
    ------
    UserInputError
        If input ends (EOF) or the prompt is cancelled.

    Examples
    --------
    >>> import builtins
    >>> builtins.input = lambda _p: "n"
    >>> ask_confirm("Continue?")
    False
    """
    if ch.stdin_is_interactive():
        answer = ch.questionary.confirm(prompt, default=default_yes).ask()
        if answer is None:
            raise UserInputError("Prompt was cancelled.", context={"prompt": prompt})
        return bool(answer)
    suffix = "(Y/n)" if default_yes else "(y/N)"
    value = _read_line(f"> {prompt} {suffix} ").strip().lower()
    if not value:
        return default_yes
    return value in _YES


__all__ = ["ask_confirm", "ask_secret", "ask_text"]
