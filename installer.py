"""Minimal launcher for the installer.

Its single responsibility is to delegate to
``tenant_installer.app_runner.entry_point``.

Usage:
    python installer.py
"""

from __future__ import annotations


def entry_point(argv: list[str] | None = None) -> None:
    """Run the installer.

    The import is performed inside the function to avoid importing the
    whole application at module import time.
    """
    from tenant_installer.app_runner import entry_point as app_entry_point

    app_entry_point(argv)


if __name__ == "__main__":
    entry_point()
