"""Entrypoint for the interactive installer.

Parses the (option-less) command line, configures logging, discovers the
available data-store drivers and auth plugins once, and runs the install
pipeline on a fresh event loop. The pipeline's result becomes the process
exit code: 0 on success or when the operator declines, 1 on failure.

Examples
--------
>>> import tenant_installer.app_runner as runner
>>> args = runner.parse_cli_args([])
>>> runner.run(args)  # doctest: +SKIP
0
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os

from tenant_installer import config as _config
from tenant_installer.pipeline.executor import InstallPipeline
from tenant_installer.pipeline.state import InstallContext
from tenant_installer.pipeline.steps import STEPS
from tenant_installer.provisioning.registry import Backends

logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING", enable_file: bool = True) -> None:
    r"""Configure logging output for the installer.

    All existing root handlers are replaced by a console handler and,
    optionally, a file handler writing to ``LOG_DIR/install.log``. A file
    handler that cannot be created is skipped with a warning; console
    logging still works.

    Parameters
    ----------
    level : str, optional
        Logging level name, e.g. ``"DEBUG"`` or ``"INFO"``. Defaults to
        ``"WARNING"`` so log lines do not interleave with the prompts.
    enable_file : bool, optional
        Whether to add the file handler. Defaults to True.

    Examples
    --------
    >>> configure_logging("DEBUG", enable_file=False)
    >>> import logging; logging.info("message")  # Logged to stderr only.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    file_error: OSError | None = None
    if enable_file:
        try:
            _config.LOG_DIR.mkdir(parents=True, exist_ok=True)
            handlers.insert(
                0,
                logging.FileHandler(_config.LOG_DIR / _config.LOG_FILENAME_INSTALL, mode="a"),
            )
        except OSError as exc:
            file_error = exc
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=_config.LOG_FORMAT,
        handlers=handlers,
    )
    if file_error is not None:
        logger.warning("File logging disabled: %s", file_error)


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    r"""Parse command-line arguments.

    The installer takes no options; the parser only provides ``--help``.

    Parameters
    ----------
    argv : list of str or None, optional
        Arguments to parse; ``None`` means ``sys.argv[1:]``.

    Returns
    -------
    argparse.Namespace
    """
    parser = argparse.ArgumentParser(
        description=(
            "Interactive installer: configures the instance, creates the master "
            "tenant and super user, installs content plugins and builds the front end."
        )
    )
    return parser.parse_args(argv)


def build_context(backends: Backends | None = None) -> InstallContext:
    """Create the run context with the drivers and auth plugins discovered now."""
    backends = backends or Backends()
    return InstallContext(
        drivers=backends.drivers(),
        auth_plugins=backends.auth_plugins(),
        backends=backends,
    )


def run(args: argparse.Namespace, backends: Backends | None = None) -> int:
    r"""Run the installer pipeline and return its exit code.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed arguments (currently unused).
    backends : Backends, optional
        Collaborator factories; defaults to runtime discovery.

    Returns
    -------
    int
        0 on success or clean decline, 1 on failure.
    """
    ctx = build_context(backends)
    pipeline = InstallPipeline(STEPS, ctx)
    return asyncio.run(pipeline.run())


def entry_point(argv: list[str] | None = None) -> None:
    """Run the installer from the command line and exit with its status."""
    args = parse_cli_args(argv)
    configure_logging(
        os.environ.get("LOG_LEVEL", "WARNING"),
        enable_file=not os.environ.get("DISABLE_FILE_LOGS"),
    )
    raise SystemExit(run(args))


__all__ = ["build_context", "configure_logging", "entry_point", "parse_cli_args", "run"]
