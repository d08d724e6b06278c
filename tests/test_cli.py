"""CLI: config handling and connection errors."""

import json
import socket

import pytest
from click.testing import CliRunner

from chatwire.cli import main as cli_main
from chatwire.transport.websocket import DEFAULT_URL


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(cli_main, "CONFIG_FILE", path)
    monkeypatch.delenv("CHATWIRE_URL", raising=False)
    monkeypatch.delenv("CHATWIRE_USERNAME", raising=False)
    return path


def test_config_saves_defaults(config_file):
    result = CliRunner().invoke(cli_main.main, ["config", "--url", "ws://chat.local:9000", "-u", "alice"])
    assert result.exit_code == 0, result.output
    assert json.loads(config_file.read_text()) == {"url": "ws://chat.local:9000", "username": "alice"}
    assert "alice" in result.output


def test_config_show_without_file(config_file):
    result = CliRunner().invoke(cli_main.main, ["config"])
    assert result.exit_code == 0, result.output
    assert "(not set)" in result.output
    assert not config_file.exists()


def test_resolve_precedence(config_file, monkeypatch):
    assert cli_main._resolve(None, None) == (DEFAULT_URL, None)

    config_file.write_text(json.dumps({"url": "ws://from-file", "username": "filed"}))
    assert cli_main._resolve(None, None) == ("ws://from-file", "filed")

    monkeypatch.setenv("CHATWIRE_URL", "ws://from-env")
    monkeypatch.setenv("CHATWIRE_USERNAME", "envy")
    assert cli_main._resolve(None, None) == ("ws://from-env", "envy")
    assert cli_main._resolve("ws://from-flag", "flag") == ("ws://from-flag", "flag")


def test_send_reports_connection_failure(config_file):
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    result = CliRunner().invoke(
        cli_main.main, ["send", "hi", "--url", f"ws://127.0.0.1:{port}", "-u", "alice"],
    )
    assert result.exit_code == 1
