"""Declarative prompt schema for the installer.

Each interactive question is described by a :class:`ConfigItemSpec`: its
key, value type, prompt text, default, optional validation (a regular
expression and/or a ``conform`` predicate) and an optional ``transform``
applied to the accepted raw answer. Specs are built once, before the
pipeline starts, and are never mutated.

Choices whose valid values are only known at runtime (installed data-store
drivers, available authentication plugins) are presented as 1-based index
menus built by :func:`index_menu_item`.

Examples
--------
>>> item = index_menu_item("dbType", "Choose your database driver type", ["sqlite"])
>>> item.conform("1"), item.conform("2")
(True, False)
>>> item.transform("1")
'sqlite'
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from tenant_installer.exceptions import ConfigurationError

ResolvedConfig = dict[str, Any]

VALUE_TYPES: tuple[str, ...] = ("string", "number", "boolean")

_YES_PATTERN = re.compile(r"(Y|y)[es]*")
_INDEX_PATTERN = re.compile(r"\s*([0-9]+)\s*")


@dataclass(frozen=True)
class ConfigItemSpec:
    r"""Description of a single configuration prompt.

    Attributes
    ----------
    name : str
        Key under which the final value is stored in the resolved config.
    value_type : str
        One of ``"string"``, ``"number"`` or ``"boolean"``; used to coerce the
        raw answer when no ``transform`` is given.
    description : str
        Prompt text shown to the operator.
    default : Any
        Value used when the answer is left blank; ``None`` for no default.
    pattern : str or None
        Regular expression the raw answer must match (``re.match``).
    conform : Callable[[str], bool] or None
        Predicate the raw answer must satisfy.
    transform : Callable[[str], Any] or None
        Maps the accepted raw answer to the stored value.
    hidden : bool
        Whether the answer must not be echoed.
    required : bool
        Whether a blank answer without a default is rejected.

    Raises
    ------
    ConfigurationError
        If ``value_type`` is unknown, or the default would be rejected by
        ``pattern`` or ``conform``.
    """

    name: str
    value_type: str = "string"
    description: str = ""
    default: Any = None
    pattern: str | None = None
    conform: Callable[[str], bool] | None = None
    transform: Callable[[str], Any] | None = None
    hidden: bool = False
    required: bool = False

    def __post_init__(self) -> None:
        if self.value_type not in VALUE_TYPES:
            raise ConfigurationError(
                f"Unknown value type '{self.value_type}' for '{self.name}'.",
                context={"item": self.name},
            )
        if self.default is None:
            return
        if not self.accepts(str(self.default)):
            raise ConfigurationError(
                f"Default for '{self.name}' fails its own validation.",
                context={"item": self.name, "default": self.default},
            )

    def accepts(self, raw: str) -> bool:
        """Return True when ``raw`` passes both ``pattern`` and ``conform``."""
        if self.pattern is not None and not re.match(self.pattern, raw):
            return False
        if self.conform is not None and not self.conform(raw):
            return False
        return True


def is_yes(value: str) -> bool:
    """Interpret a free-text answer as yes/no (``y``, ``Y``, ``yes`` ... are yes)."""
    return bool(_YES_PATTERN.search(value or ""))


def _parse_index(raw: str) -> int | None:
    match = _INDEX_PATTERN.fullmatch(str(raw))
    return int(match.group(1)) if match else None


def menu_prompt(title: str, candidates: Sequence[str]) -> str:
    """Render ``candidates`` as a numbered menu under ``title``."""
    lines = [f"{title} (enter a number)"]
    lines.extend(f"{index}. {candidate}" for index, candidate in enumerate(candidates, 1))
    return "\n".join(lines)


def index_menu_item(
    name: str,
    title: str,
    candidates: Sequence[str],
    default: str = "1",
) -> ConfigItemSpec:
    r"""Build a 1-based index menu over identifiers discovered at runtime.

    ``conform`` accepts exactly the answers that parse to an integer in
    ``[1, len(candidates)]`` and ``transform`` maps such an answer back to
    the candidate identifier.

    Parameters
    ----------
    name : str
        Config key of the item.
    title : str
        Menu heading.
    candidates : Sequence[str]
        Identifiers to choose from, in display order.
    default : str, optional
        Default menu index (``"1"``).

    Returns
    -------
    ConfigItemSpec

    Raises
    ------
    ConfigurationError
        If ``candidates`` is empty.
    """
    options = tuple(candidates)
    if not options:
        raise ConfigurationError(
            f"No candidates available for '{name}'.", context={"item": name}
        )

    def conform(raw: str) -> bool:
        index = _parse_index(raw)
        return index is not None and 0 < index <= len(options)

    def transform(raw: str) -> str:
        return options[_parse_index(raw) - 1]

    return ConfigItemSpec(
        name=name,
        value_type="string",
        description=menu_prompt(title, options),
        default=default,
        conform=conform,
        transform=transform,
    )


def build_config_items(
    drivers: Sequence[str], auth_plugins: Sequence[str]
) -> list[ConfigItemSpec]:
    """Return the environment prompts, generic over the discovered capabilities."""
    return [
        ConfigItemSpec(
            name="serverPort",
            value_type="number",
            description="Server port",
            pattern=r"^[0-9]+\W*$",
            default=5000,
        ),
        ConfigItemSpec(name="serverName", description="Server name", default="localhost"),
        index_menu_item("dbType", "Choose your database driver type", drivers),
        ConfigItemSpec(name="dbHost", description="Database host", default="localhost"),
        ConfigItemSpec(
            name="dbName",
            description="Master database name",
            pattern=r"^[A-Za-z0-9_-]+\W*$",
            default="tenant-master",
        ),
        ConfigItemSpec(
            name="dbPort",
            value_type="number",
            description="Database server port",
            pattern=r"^[0-9]+\W*$",
            default=27017,
        ),
        ConfigItemSpec(name="dbUser", description="Database user (blank for none)"),
        ConfigItemSpec(
            name="dbPass", description="Database password (blank for none)", hidden=True
        ),
        ConfigItemSpec(
            name="dataRoot",
            description="Data directory path",
            pattern=r"^[A-Za-z0-9_-]+\W*$",
            default="data",
        ),
        ConfigItemSpec(
            name="sessionSecret",
            description="Session secret",
            pattern=r"^.+$",
            default="your-session-secret",
        ),
        index_menu_item("auth", "Choose your authentication method", auth_plugins),
        ConfigItemSpec(
            name="useffmpeg",
            value_type="boolean",
            description="Will ffmpeg be used? y/N",
            transform=is_yes,
            default="N",
        ),
        ConfigItemSpec(
            name="smtpService",
            description="Which SMTP service (if any) will be used?",
            default="none",
        ),
        ConfigItemSpec(name="smtpUsername", description="SMTP username"),
        ConfigItemSpec(name="smtpPassword", description="SMTP password", hidden=True),
        ConfigItemSpec(name="fromAddress", description="Sender email address"),
        ConfigItemSpec(
            name="outputPlugin",
            description="Which output plugin will be used?",
            default="adapt",
        ),
    ]


TENANT_ITEMS: tuple[ConfigItemSpec, ...] = (
    ConfigItemSpec(
        name="name",
        description="Set a unique name for your master tenant",
        pattern=r"^[A-Za-z0-9_-]+\W*$",
        default="master",
    ),
    ConfigItemSpec(
        name="displayName",
        description="Set the display name for your tenant",
        required=True,
        default="Master",
    ),
)

USER_ITEMS: tuple[ConfigItemSpec, ...] = (
    ConfigItemSpec(name="email", description="Email address", required=True),
    ConfigItemSpec(name="password", description="Password", hidden=True, required=True),
)


__all__ = [
    "ConfigItemSpec",
    "ResolvedConfig",
    "TENANT_ITEMS",
    "USER_ITEMS",
    "build_config_items",
    "index_menu_item",
    "is_yes",
    "menu_prompt",
]
