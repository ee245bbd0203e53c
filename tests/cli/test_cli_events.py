"""Tests for the relay CLI commands."""

import importlib
import json

import httpx
import pytest
from conftest import RecordingTransport, UnreachableTransport
from typer.testing import CliRunner

from blog_services.cli.app import app
from blog_services.cli.commands import events
from blog_services.settings import get_settings

runner = CliRunner()


def use_transport(monkeypatch: pytest.MonkeyPatch, transport: httpx.BaseTransport) -> None:
    monkeypatch.setattr(events, "make_client", lambda timeout: httpx.Client(timeout=timeout, transport=transport))


def history_transport(history: list[dict]) -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(200, json=history))


def test_list_prints_history(monkeypatch):
    use_transport(
        monkeypatch,
        history_transport([{"type": "PostCreated", "data": {"id": "p1", "title": "Hello"}}, {"type": "CommentCreated", "data": {}}]),
    )

    result = runner.invoke(app, ["events", "list", "--relay-url", "http://relay:4005"])

    assert result.exit_code == 0
    assert "PostCreated" in result.output
    assert "CommentCreated" in result.output
    assert "2 events" in result.output


def test_list_empty_history(monkeypatch):
    use_transport(monkeypatch, history_transport([]))

    result = runner.invoke(app, ["events", "list"])

    assert result.exit_code == 0
    assert "not received any event" in result.output


def test_list_with_relay_down(monkeypatch):
    use_transport(monkeypatch, UnreachableTransport())

    result = runner.invoke(app, ["events", "list", "-r", "http://relay:4005"])

    assert result.exit_code == 1
    assert "cannot read relay history" in result.output


def test_publish_sends_envelope(monkeypatch):
    transport = RecordingTransport()
    use_transport(monkeypatch, transport)
    data = {"postId": "p1", "id": "c1", "status": "approved"}

    result = runner.invoke(app, ["events", "publish", "CommentModerated", "-d", json.dumps(data), "-r", "http://relay:4005/"])

    assert result.exit_code == 0
    assert transport.urls() == ["http://relay:4005/events"]
    assert transport.bodies() == [{"type": "CommentModerated", "data": data}]
    assert "Published CommentModerated" in result.output


def test_publish_rejects_invalid_json(monkeypatch):
    transport = RecordingTransport()
    use_transport(monkeypatch, transport)

    result = runner.invoke(app, ["events", "publish", "CommentModerated", "--data", "{not json"])

    assert result.exit_code == 1
    assert "not valid JSON" in result.output
    assert transport.requests == []


def test_publish_reports_relay_errors(monkeypatch):
    use_transport(monkeypatch, RecordingTransport(status_code=422))

    result = runner.invoke(app, ["events", "publish", "PostCreated"])

    assert result.exit_code == 1
    assert "cannot publish" in result.output


def record_timeouts(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    timeouts: list[float] = []

    def client(timeout: float) -> httpx.Client:
        timeouts.append(timeout)
        return httpx.Client(timeout=timeout, transport=history_transport([]))

    monkeypatch.setattr(events, "make_client", client)
    return timeouts


def test_timeout_defaults_to_delivery_timeout(monkeypatch):
    timeouts = record_timeouts(monkeypatch)

    result = runner.invoke(app, ["events", "list"])

    assert result.exit_code == 0
    assert timeouts == [get_settings().delivery_timeout]


def test_global_timeout_reaches_client(monkeypatch):
    timeouts = record_timeouts(monkeypatch)

    result = runner.invoke(app, ["--timeout", "2.5", "events", "list"])

    assert result.exit_code == 0
    assert timeouts == [2.5]


def test_verbose_switches_logging_to_debug(monkeypatch):
    levels: list[str] = []
    record_timeouts(monkeypatch)
    monkeypatch.setattr(importlib.import_module("blog_services.cli.app"), "configure_cli_logging", levels.append)

    result = runner.invoke(app, ["-v", "events", "list"])

    assert result.exit_code == 0
    assert levels == ["DEBUG"]
