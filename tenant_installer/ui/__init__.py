"""Terminal UI layer for the installer.

Re-exports the output primitives from ``basic.py`` and the prompt helpers
from ``prompts.py`` so callers can write
``from tenant_installer.ui import ui_info, ask_confirm``.
No installation logic lives in this package.
"""

from tenant_installer.ui.basic import (
    ui_error,
    ui_header,
    ui_info,
    ui_plain,
    ui_rule,
    ui_status,
    ui_success,
    ui_warning,
)
from tenant_installer.ui.prompts import ask_confirm, ask_secret, ask_text

__all__ = [
    "ask_confirm",
    "ask_secret",
    "ask_text",
    "ui_error",
    "ui_header",
    "ui_info",
    "ui_plain",
    "ui_rule",
    "ui_status",
    "ui_success",
    "ui_warning",
]
