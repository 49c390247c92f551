"""Controlled subprocess runner for the front-end build.

Launches the build tool in the framework directory with stdout and stderr
merged and line buffered, echoing each line as soon as it is produced.
The runner never raises: every failure is logged and reported through the
boolean result, so the caller can decide whether the failure is fatal.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from tenant_installer.ui.basic import ui_plain

logger = logging.getLogger(__name__)


def run_build(command: Sequence[str], cwd: Path) -> bool:
    r"""Run ``command`` in ``cwd`` and stream its output to the console.

    Parameters
    ----------
    command : Sequence[str]
        Program and arguments, e.g. ``("npm", "run", "build")``.
    cwd : Path
        Working directory for the process.

    Returns
    -------
    bool
        True if the process exited with code 0, False on a non-zero exit or
        if it could not be started.

    Examples
    --------
    >>> run_build(["true"], Path("."))  # doctest: +SKIP
    True
    """
    logger.info("Running %s in %s", " ".join(command), cwd)
    try:
        proc = subprocess.Popen(
            list(command),
            cwd=cwd,
            text=True,
            encoding="utf-8",
            errors="replace",
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            bufsize=1,
        )
    except OSError as error:
        logger.error("Could not start %s: %s", command[0], error)
        return False

    try:
        with proc.stdout:
            for raw in proc.stdout:
                line = raw.rstrip("\n\r")
                logger.debug("build: %s", line)
                ui_plain(line)
        return_code = proc.wait()
    except (OSError, ValueError) as error:
        logger.error("Lost output of %s: %s", command[0], error)
        return False
    finally:
        if proc.returncode is None:
            proc.kill()
            proc.wait()
    if return_code == 0:
        logger.info("Build completed")
        return True
    logger.error("Build failed (Return code: %s)", return_code)
    return False


__all__ = ["run_build"]
