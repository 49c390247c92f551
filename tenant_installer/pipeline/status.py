"""Rendering helpers for the end-of-run step status table."""

from __future__ import annotations

from collections.abc import Sequence

from tenant_installer.ui.console_helpers import Table

STEP_OK = "ok"
STEP_FAIL = "fail"
STEP_WARN = "warn"
STEP_SKIPPED = "skipped"


def _status_label(base: str) -> str:
    """Return the display label for a step outcome key.

    Examples
    --------
    >>> _status_label("ok")
    '✅ Done'
    """
    labels = {
        STEP_SKIPPED: "⏳ Not run",
        STEP_OK: "✅ Done",
        STEP_WARN: "⚠️  Done with warnings",
        STEP_FAIL: "❌ Failed",
    }
    return labels.get(base, base)


def render_step_table(
    names: Sequence[str], outcomes: dict[str, str], title: str = "Install steps"
) -> Table:
    r"""Build a Rich table with one row per step.

    Parameters
    ----------
    names : Sequence[str]
        Step names in pipeline order.
    outcomes : dict[str, str]
        Step name to outcome key; missing steps show as not run.
    title : str, optional
        Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold blue")
    table.add_column("Step", style="bold")
    table.add_column("Status")
    for name in names:
        table.add_row(name, _status_label(outcomes.get(name, STEP_SKIPPED)))
    return table


__all__ = [
    "STEP_FAIL",
    "STEP_OK",
    "STEP_SKIPPED",
    "STEP_WARN",
    "_status_label",
    "render_step_table",
]
