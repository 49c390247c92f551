"""Schema-driven interactive configuration collector.

Turns an ordered sequence of :class:`~tenant_installer.configuration.schema.ConfigItemSpec`
into sequential prompts and returns the resolved (post-transform) values.

Rules applied to every item:

- A blank answer falls back to the item's default.
- A blank answer on a required item without a default is asked again.
- An answer rejected by the item's ``pattern`` or ``conform`` predicate is
  reported and asked again; it never reaches the resolved config.
- The stored value is ``transform(answer)`` when the item defines a
  transform, otherwise the answer coerced to the item's ``value_type``.

End of input propagates as :class:`~tenant_installer.exceptions.UserInputError`
from the prompt helpers.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from typing import Any

from tenant_installer.configuration.schema import ConfigItemSpec, ResolvedConfig, is_yes
from tenant_installer.ui import prompts
from tenant_installer.ui.basic import ui_warning

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"[+-]?\d+(\.\d+)?")

AskText = Callable[[str, "str | None"], str]
AskSecret = Callable[[str], str]


def coerce_value(raw: str, value_type: str) -> Any:
    r"""Convert an accepted raw answer to ``value_type``.

    Parameters
    ----------
    raw : str
        The validated answer.
    value_type : str
        ``"number"``, ``"boolean"`` or ``"string"``.

    Returns
    -------
    Any
        ``int`` (or ``float`` for fractional input) for numbers, ``bool`` for
        booleans, the stripped string otherwise.

    Raises
    ------
    ValueError
        If a number was expected and ``raw`` does not start with one.

    Examples
    --------
    >>> coerce_value("5000 ", "number")
    5000
    >>> coerce_value("yes", "boolean")
    True
    """
    text = raw.strip()
    if value_type == "number":
        # Patterns such as ``^[0-9]+\W*$`` admit trailing punctuation.
        match = _NUMBER.match(text)
        if match is None:
            raise ValueError(f"not a number: {raw!r}")
        return float(match.group(0)) if match.group(1) else int(match.group(0))
    if value_type == "boolean":
        return is_yes(text)
    return text


def _ask_raw(item: ConfigItemSpec, ask: AskText, ask_secret: AskSecret) -> str:
    default = None if item.default is None else str(item.default)
    if item.hidden:
        answer = ask_secret(item.description)
        return answer or (default or "")
    return ask(item.description, default)


def resolve_item(
    item: ConfigItemSpec,
    ask: AskText = prompts.ask_text,
    ask_secret: AskSecret = prompts.ask_secret,
) -> Any:
    r"""Prompt for a single item until an acceptable answer is given.

    Parameters
    ----------
    item : ConfigItemSpec
        The item to ask for.
    ask : callable, optional
        ``ask(prompt, default) -> str`` used for visible answers.
    ask_secret : callable, optional
        ``ask_secret(prompt) -> str`` used for hidden answers.

    Returns
    -------
    Any
        The final value for ``item.name``.

    Raises
    ------
    UserInputError
        If input ends while the item is being asked.
    """
    while True:
        raw = _ask_raw(item, ask, ask_secret)
        if not raw:
            if item.required:
                ui_warning(f"A value for '{item.name}' is required.")
                continue
            if item.pattern is None and item.conform is None:
                return item.transform(raw) if item.transform else raw
        if not item.accepts(raw):
            logger.debug("Rejected answer for %s", item.name)
            ui_warning(f"Invalid value for '{item.name}', please try again.")
            continue
        if item.transform is not None:
            return item.transform(raw)
        try:
            return coerce_value(raw, item.value_type)
        except ValueError:
            ui_warning(f"'{item.name}' expects a {item.value_type}, please try again.")


def collect(
    items: Iterable[ConfigItemSpec],
    ask: AskText = prompts.ask_text,
    ask_secret: AskSecret = prompts.ask_secret,
) -> ResolvedConfig:
    r"""Resolve every item in order and return the resulting mapping.

    Parameters
    ----------
    items : Iterable[ConfigItemSpec]
        Specs in prompt order.
    ask, ask_secret : callable, optional
        Prompt functions; default to :mod:`tenant_installer.ui.prompts`.

    Returns
    -------
    ResolvedConfig
        ``{item.name: value}`` for every item, in prompt order.

    Examples
    --------
    >>> from tenant_installer.configuration.schema import ConfigItemSpec
    >>> items = [ConfigItemSpec("serverPort", "number", "Server port", 5000, r"^[0-9]+\W*$")]
    >>> collect(items, ask=lambda prompt, default: default)
    {'serverPort': 5000}
    """
    resolved: ResolvedConfig = {}
    for item in items:
        resolved[item.name] = resolve_item(item, ask=ask, ask_secret=ask_secret)
    logger.info("Collected %d configuration items", len(resolved))
    return resolved


__all__ = ["coerce_value", "collect", "resolve_item"]
