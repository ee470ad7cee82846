import json

import pytest

from gator import config
from gator.cli import build_commands, main
from gator.commands import handler_login


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    cfg = {"db_url": str(tmp_path / "gator.db"), "current_user_name": ""}
    (tmp_path / ".gatorconfig.json").write_text(json.dumps(cfg), encoding="utf-8")
    return tmp_path


def test_build_commands_names():
    cmds = build_commands()
    assert set(cmds.handlers) == {
        "login", "register", "reset", "users", "agg", "addfeed", "feeds",
    }
    assert cmds.handlers["login"] is handler_login


def test_missing_arguments(capsys):
    assert main([]) == 1
    assert "missing arguments" in capsys.readouterr().out


def test_register_then_users(home, capsys):
    assert main(["register", "alice"]) == 0
    assert main(["register", "bob"]) == 0
    assert config.read(home / ".gatorconfig.json").current_user_name == "bob"
    capsys.readouterr()
    assert main(["users"]) == 0
    assert capsys.readouterr().out == "\n* alice\n* bob (current)"


def test_login_switches_user(home):
    main(["register", "alice"])
    main(["register", "bob"])
    assert main(["login", "alice"]) == 0
    assert config.read(home / ".gatorconfig.json").current_user_name == "alice"


def test_unknown_command(home, capsys):
    assert main(["frobnicate"]) == 1
    assert "command function not found" in capsys.readouterr().out


def test_failed_command_reports_error(home, capsys):
    assert main(["login", "nobody"]) == 1
    assert "nobody does not exist." in capsys.readouterr().out


def test_addfeed_and_feeds(home, capsys):
    main(["register", "alice"])
    assert main(["addfeed", "blog", "https://example.com/feed.xml"]) == 0
    capsys.readouterr()
    assert main(["feeds"]) == 0
    assert capsys.readouterr().out == "\n1. blog, alice"


def test_missing_config(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert main(["users"]) == 1
    out = capsys.readouterr().out
    assert "error Read function" in out
    assert "Error while opening database" in out