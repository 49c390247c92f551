"""Persistence of the resolved configuration.

The resolved configuration is written twice: as a flat ``KEY=value`` env
document (read by process managers and by the application at start-up)
and as a JSON document. Both writes are mandatory. A write that fails, or
that writes nothing at all, raises
:class:`~tenant_installer.exceptions.PersistenceError` so the installer
never proceeds with a configuration that only exists in memory.

Examples
--------
>>> from pathlib import Path
>>> import tempfile
>>> root = Path(tempfile.mkdtemp())
>>> save_config({"serverPort": 5000}, root / ".env", root / "conf" / "config.json")
>>> read_env_file(root / ".env")
{'serverPort': '5000'}
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from tenant_installer import config as _config
from tenant_installer.exceptions import PersistenceError

logger = logging.getLogger(__name__)

_PLAIN_VALUE = re.compile(r"[A-Za-z0-9_.:/@+,-]*")


def _env_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    if _PLAIN_VALUE.fullmatch(text):
        return text
    # single quotes, as python-dotenv's set_key writes them
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def render_env(resolved: Mapping[str, Any]) -> str:
    """Render ``resolved`` as ``KEY=value`` lines, in mapping order."""
    return "\n".join(f"{key}={_env_value(value)}" for key, value in resolved.items())


def _write_document(path: Path, content: str, label: str) -> int:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            written = handle.write(content)
    except OSError as exc:
        raise PersistenceError(
            f"Failed to write {label}. Do you have write permissions for the directory?",
            context={"path": str(path)},
        ) from exc
    if written == 0:
        raise PersistenceError(
            f"Failed to write {label}: nothing was written.",
            context={"path": str(path)},
        )
    logger.info("Wrote %s (%d characters) to %s", label, written, path)
    return written


def save_config(
    resolved: Mapping[str, Any],
    env_path: Path | None = None,
    json_path: Path | None = None,
) -> None:
    r"""Write ``resolved`` to the env document and the JSON document.

    Parameters
    ----------
    resolved : Mapping[str, Any]
        The resolved configuration.
    env_path : Path, optional
        Target of the ``KEY=value`` document (defaults to ``config.ENV_PATH``).
    json_path : Path, optional
        Target of the JSON document (defaults to ``config.CONFIG_JSON_PATH``).

    Raises
    ------
    PersistenceError
        If either write fails or writes zero characters.
    """
    env_target = env_path or _config.ENV_PATH
    json_target = json_path or _config.CONFIG_JSON_PATH
    _write_document(env_target, render_env(resolved), f"{env_target.name} file")
    _write_document(
        json_target,
        json.dumps(dict(resolved), default=str),
        f"{json_target.parent.name}/{json_target.name} file",
    )


def read_env_file(env_path: Path | None = None) -> dict[str, str | None]:
    """Read a persisted env document back into a mapping."""
    return dict(dotenv_values(env_path or _config.ENV_PATH, interpolate=False))


__all__ = ["read_env_file", "render_env", "save_config"]
