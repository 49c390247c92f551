"""Tests for persistence of the resolved configuration."""

import json

import pytest

from tenant_installer.configuration import store
from tenant_installer.exceptions import PersistenceError


def test_save_config_writes_env_and_json(tmp_path):
    env_path = tmp_path / ".env"
    json_path = tmp_path / "conf" / "config.json"
    resolved = {"serverPort": 5000, "serverName": "localhost", "useffmpeg": False, "dbUser": None}

    store.save_config(resolved, env_path, json_path)

    assert env_path.read_text(encoding="utf-8").splitlines() == [
        "serverPort=5000",
        "serverName=localhost",
        "useffmpeg=false",
        "dbUser=",
    ]
    assert json.loads(json_path.read_text(encoding="utf-8")) == resolved


def test_read_back_with_dotenv(tmp_path):
    env_path = tmp_path / ".env"
    store.save_config({"serverPort": 5000, "auth": "local"}, env_path, tmp_path / "c.json")
    assert store.read_env_file(env_path) == {"serverPort": "5000", "auth": "local"}
    assert json.loads((tmp_path / "c.json").read_text(encoding="utf-8")) == {"serverPort": 5000, "auth": "local"}


def test_default_paths_come_from_config(project_paths):
    store.save_config({"serverPort": 5000})
    assert (project_paths / ".env").exists()
    assert (project_paths / "conf" / "config.json").exists()
    assert json.loads((project_paths / "conf" / "config.json").read_text(encoding="utf-8")) == {"serverPort": 5000}


def test_unwritable_target_raises(tmp_path):
    blocked = tmp_path / "blocked"
    blocked.mkdir()
    # A directory in place of the file makes open() fail.
    with pytest.raises(PersistenceError) as excinfo:
        store.save_config({"a": 1}, blocked, tmp_path / "config.json")
    assert "Failed to write" in excinfo.value.message
    assert isinstance(excinfo.value.__cause__, OSError)


def test_zero_character_write_raises(tmp_path):
    with pytest.raises(PersistenceError):
        store.save_config({}, tmp_path / ".env", tmp_path / "config.json")


@pytest.mark.parametrize(
    "secret",
    ["pa ss#word", "it's", 'say "hi"', "back\\slash\\", "${HOME}", "x=1"],
)
def test_secrets_read_back_intact(tmp_path, secret):
    env_path = tmp_path / ".env"
    store.save_config({"sessionSecret": secret, "serverPort": 5000}, env_path, tmp_path / "c.json")
    assert store.read_env_file(env_path) == {"sessionSecret": secret, "serverPort": "5000"}


def test_plain_values_stay_unquoted():
    assert store.render_env({"serverName": "db.example.com", "url": "https://x.org/a-b"}) == (
        "serverName=db.example.com\nurl=https://x.org/a-b"
    )
