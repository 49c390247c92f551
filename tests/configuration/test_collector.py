"""Tests for the schema-driven configuration collector."""

import pytest

from tenant_installer.configuration import collector
from tenant_installer.configuration.schema import (
    ConfigItemSpec,
    build_config_items,
    index_menu_item,
    is_yes,
)
from tenant_installer.exceptions import UserInputError

PORT = ConfigItemSpec("serverPort", "number", "Server port", 5000, r"^[0-9]+\W*$")


def _answers(*values):
    """Prompt double returning ``values`` in order, falling back to the default on blanks."""
    queue = list(values)
    prompts = []

    def ask(prompt, default=None):
        prompts.append(prompt)
        value = queue.pop(0)
        return value or (default or "")

    ask.prompts = prompts
    return ask


def _no_secret(prompt):
    raise AssertionError(f"unexpected secret prompt {prompt!r}")


def test_blank_port_uses_default():
    assert collector.resolve_item(PORT, ask=_answers(""), ask_secret=_no_secret) == 5000


def test_invalid_port_is_asked_again(monkeypatch):
    warnings = []
    monkeypatch.setattr(collector, "ui_warning", warnings.append)
    ask = _answers("abc", "8080")
    assert collector.resolve_item(PORT, ask=ask, ask_secret=_no_secret) == 8080
    assert len(ask.prompts) == 2
    assert warnings == ["Invalid value for 'serverPort', please try again."]


def test_required_blank_is_asked_again(monkeypatch):
    monkeypatch.setattr(collector, "ui_warning", lambda _m: None)
    item = ConfigItemSpec(name="email", description="Email address", required=True)
    ask = _answers("", "", "admin@example.com")
    assert collector.resolve_item(item, ask=ask, ask_secret=_no_secret) == "admin@example.com"
    assert len(ask.prompts) == 3


def test_menu_answer_is_transformed(monkeypatch):
    monkeypatch.setattr(collector, "ui_warning", lambda _m: None)
    item = index_menu_item("dbType", "Choose your database driver type", ["sqlite", "mysql"])
    assert collector.resolve_item(item, ask=_answers("3", "0", "2"), ask_secret=_no_secret) == "mysql"
    assert collector.resolve_item(item, ask=_answers(""), ask_secret=_no_secret) == "sqlite"


def test_hidden_items_use_secret_prompt():
    item = ConfigItemSpec(name="dbPass", description="Database password", hidden=True)
    seen = []

    def secret(prompt):
        seen.append(prompt)
        return "  s3cret "

    assert collector.resolve_item(item, ask=_answers(), ask_secret=secret) == "s3cret"
    assert seen == ["Database password"]


def test_boolean_transform():
    item = ConfigItemSpec(name="useffmpeg", value_type="boolean", transform=is_yes, default="N")
    assert collector.resolve_item(item, ask=_answers(""), ask_secret=_no_secret) is False
    assert collector.resolve_item(item, ask=_answers("yes"), ask_secret=_no_secret) is True


@pytest.mark.parametrize(
    "raw, value_type, expected",
    [("5000 ", "number", 5000), ("1.5", "number", 1.5), ("y", "boolean", True), (" a ", "string", "a")],
)
def test_coerce_value(raw, value_type, expected):
    assert collector.coerce_value(raw, value_type) == expected


def test_coerce_value_rejects_non_numbers():
    with pytest.raises(ValueError):
        collector.coerce_value("abc", "number")


def test_end_of_input_propagates():
    def ask(prompt, default=None):
        raise UserInputError("Input ended before the prompt was answered.")

    with pytest.raises(UserInputError):
        collector.collect([PORT], ask=ask, ask_secret=_no_secret)


def test_collect_full_schema_with_defaults():
    items = build_config_items(["sqlite"], ["local"])
    resolved = collector.collect(
        items,
        ask=lambda prompt, default=None: default or "",
        ask_secret=lambda prompt: "",
    )
    assert list(resolved) == [item.name for item in items]
    assert resolved["serverPort"] == 5000
    assert resolved["dbType"] == "sqlite"
    assert resolved["auth"] == "local"
    assert resolved["useffmpeg"] is False
    assert resolved["dbPass"] == ""
    assert resolved["dbUser"] == ""
