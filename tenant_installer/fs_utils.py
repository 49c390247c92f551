"""Filesystem utilities to validate and safely remove whitelisted paths.

The installer replaces the local framework copy on every run. Removal goes
through :func:`safe_rmtree`, which refuses anything outside the explicit
whitelist below.

Functions
---------
- ``create_safe_path``: Validate and stamp a path as safe for removal.
- ``safe_rmtree``: Remove a validated directory tree.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import NewType

from tenant_installer import config as _config

logger = logging.getLogger(__name__)

# Static "seal" for a path validated for removal.
_ValidatedPath = NewType("_ValidatedPath", Path)


def create_safe_path(path_to_validate: Path) -> _ValidatedPath:
    r"""Validate and stamp a Path as safe for destructive operations.

    Parameters
    ----------
    path_to_validate : Path
        The directory path to be validated for safe removal.

    Returns
    -------
    _ValidatedPath
        The resolved path, stamped for use by :func:`safe_rmtree`.

    Raises
    ------
    PermissionError
        If the path is the project root, lies outside the project, or is
        not whitelisted.

    Examples
    --------
    >>> from pathlib import Path
    >>> create_safe_path(Path("/"))  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    PermissionError: SECURITY STOP: Attempt to delete the project root was blocked.
    """
    project_root = _config.PROJECT_ROOT.resolve()
    target_path = Path(path_to_validate).resolve()

    if target_path == project_root:
        raise PermissionError(
            "SECURITY STOP: Attempt to delete the project root was blocked."
        )
    if not target_path.is_relative_to(project_root):
        raise PermissionError(
            "SECURITY STOP: Attempt to delete a path outside the project was blocked."
        )

    whitelisted_roots = [_config.FRAMEWORK_DIR.resolve()]
    if not any(
        target_path == root or target_path.is_relative_to(root)
        for root in whitelisted_roots
    ):
        raise PermissionError(
            f"SECURITY STOP: Path '{target_path}' is not in the whitelist."
        )
    return _ValidatedPath(target_path)


def safe_rmtree(safe_path: _ValidatedPath | Path) -> None:
    r"""Remove a directory tree after validating it with :func:`create_safe_path`.

    A missing path is a no-op.

    Raises
    ------
    PermissionError
        If the path fails validation.
    """
    validated = create_safe_path(Path(safe_path))
    if validated.exists():
        logger.warning("Performing safe rmtree on: %s", validated)
        shutil.rmtree(validated)
        logger.info("Removed directory: %s", validated)
    else:
        logger.info("Path '%s' does not exist; nothing to remove.", validated)


__all__ = ["create_safe_path", "safe_rmtree"]
