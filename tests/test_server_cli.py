"""Tests for the specforge-server entry point."""

import uvicorn

from specforge import server_cli
from specforge.config import settings


def test_defaults_come_from_settings(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))
    monkeypatch.setattr(settings, "host", "127.0.0.1")
    monkeypatch.setattr(settings, "port", 9100)

    server_cli.main([])

    target, kwargs = calls[0]
    assert target == "specforge.main:app"
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9100


def test_arguments_override_settings(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda target, **kwargs: calls.append(kwargs))

    server_cli.main(["--host", "10.0.0.5", "--port", "9200"])

    assert calls[0]["host"] == "10.0.0.5"
    assert calls[0]["port"] == 9200


def test_local_mode_switches_to_console_logs(monkeypatch):
    monkeypatch.setattr(uvicorn, "run", lambda target, **kwargs: None)
    monkeypatch.setattr(settings, "json_logs", True)
    monkeypatch.setenv("SPECFORGE_JSON_LOGS", "1")

    server_cli.main(["--local"])

    assert settings.json_logs is False
    assert server_cli.os.environ["SPECFORGE_JSON_LOGS"] == "0"
