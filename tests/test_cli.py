"""End-to-end tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from puncher import __version__
from puncher import client as client_module
from puncher.cli import EXIT_CANCELLED, app
from puncher.config import PuncherConfig, default_config_path, save_config

runner = CliRunner()


class _FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code
        self.ok = status_code < 400
        self.text = str(payload)
        self.headers = {}

    def json(self):
        return self._payload


@pytest.fixture
def api(monkeypatch):
    """Capture outgoing requests and answer with queued payloads."""
    sent = []
    payloads = []

    def fake_request(method, url, **kwargs):
        sent.append((method, kwargs))
        return _FakeResponse(payloads.pop(0))

    monkeypatch.setattr(client_module.requests, "request", fake_request)
    return sent, payloads


def test_version_skips_banner(config_home):
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output
    assert not default_config_path().exists()


def test_get_tasks_creates_default_config(config_home):
    result = runner.invoke(app, ["get", "tasks"])
    assert result.exit_code == 0
    assert "Available 'Recurring Tasks'" in result.output
    assert "Dummy task A-2" in result.output
    assert default_config_path().exists()


def test_get_ccc(config_home):
    result = runner.invoke(app, ["get", "ccc"])
    assert result.exit_code == 0
    assert "Example default customer cost centre" in result.output


def test_get_config(config_home):
    save_config(PuncherConfig(api_key="my-key"), default_config_path())
    result = runner.invoke(app, ["get", "config"])
    assert result.exit_code == 0
    assert "my-key" in result.output


def test_get_json():
    result = runner.invoke(app, ["get", "json"])
    assert result.exit_code == 0
    assert "JSON BODY FOR LOGOUT" in result.output
    assert "(id: 13586650)" in result.output


def test_start_with_description_dry_run(config_home, api):
    sent, _ = api
    result = runner.invoke(app, ["--dry-run", "start", "ISO27001 review"])
    assert result.exit_code == 0
    assert "NOTE: This is a DRY-RUN!" in result.output
    assert "Starting 'ISO27001 review' (ccc id: 892621)" in result.output
    assert "DRY RUN - Skipping HTTP POST" in result.output
    assert sent == []


def test_start_posts_login(config_home, api):
    sent, payloads = api
    payloads.append({"result": {"id": 42, "type": "LOGIN", "description": "Coding",
                                "timestamp": "2024-09-04T15:39:37+03:00"}})
    result = runner.invoke(app, ["start", "Coding"])
    assert result.exit_code == 0, result.output
    method, kwargs = sent[0]
    assert method == "POST"
    assert kwargs["json"]["newPunch"]["type"] == "LOGIN"
    assert kwargs["json"]["newPunch"]["description"] == "Coding"
    assert kwargs["json"]["newPunch"]["customerCostcentre"] == {"id": 901184}
    assert "Following new punch line created" in result.output


def test_start_with_menu(config_home, api):
    """Without a description the recurring task menu picks one."""
    sent, _ = api
    result = runner.invoke(app, ["-d", "start"], input="x1\nb\n1\n")
    assert result.exit_code == 0, result.output
    assert "No punch description given!" in result.output
    assert "Invalid choice!" in result.output
    assert "Starting 'Group B: Dummy task B-1'" in result.output
    assert sent == []


def test_start_menu_cancelled_on_eof(config_home):
    result = runner.invoke(app, ["-d", "start"], input="a\n")
    assert result.exit_code == EXIT_CANCELLED
    assert "Cancelled." in result.output


def test_start_with_empty_task_list_fails(config_home):
    save_config(PuncherConfig(recurring_tasks=[]), default_config_path())
    result = runner.invoke(app, ["-d", "start"])
    assert result.exit_code == 1
    assert "Neither last letter nor last number" in result.output


def test_start_with_too_many_groups_fails(config_home):
    tasks = [f"G{idx:02d} | item" for idx in range(27)]
    save_config(PuncherConfig(recurring_tasks=tasks), default_config_path())
    result = runner.invoke(app, ["-d", "start"])
    assert result.exit_code == 1
    assert "Too many task groups" in result.output


def test_stop_posts_logout(config_home, api):
    sent, payloads = api
    payloads.append({"result": {"id": 43, "type": "LOGOUT", "timestamp": "2024-09-04T16:00:00+03:00"}})
    result = runner.invoke(app, ["-v", "stop"])
    assert result.exit_code == 0, result.output
    assert sent[0][1]["json"]["newPunch"]["type"] == "LOGOUT"
    assert "CREATED PUNCH JSON" in result.output
    assert "Elapsed:" in result.output


def test_break_is_not_supported(config_home):
    result = runner.invoke(app, ["break"])
    assert result.exit_code == 1
    assert "BREAK is not supported" in result.output


def test_get_latest(config_home, api):
    sent, payloads = api
    payloads.append({"result": [
        {"id": 2, "type": "LOGIN", "timestamp": "2024-09-04T16:00:00+03:00", "description": "evening-task"},
        {"id": 1, "type": "LOGIN", "timestamp": "2024-09-04T08:00:00+03:00", "description": "morning-task"},
    ]})
    result = runner.invoke(app, ["get", "latest", "2", "login"])
    assert result.exit_code == 0, result.output
    method, kwargs = sent[0]
    assert method == "GET"
    assert kwargs["params"] == {"orderBy": "timestamp DESC", "pageSize": "2", "type": "LOGIN"}
    assert "Latest 2 worktime LOGIN punch line(s) in ascending order" in result.output
    assert result.output.index("morning-task") < result.output.index("evening-task")


def test_get_latest_none_found(config_home, api):
    _, payloads = api
    payloads.append({"result": []})
    result = runner.invoke(app, ["get", "latest", "5"])
    assert result.exit_code == 0
    assert "NONE FOUND!" in result.output


def test_get_latest_http_error(config_home, monkeypatch):
    monkeypatch.setattr(
        client_module.requests,
        "request",
        lambda method, url, **kwargs: _FakeResponse({"error": "denied"}, status_code=401),
    )
    result = runner.invoke(app, ["get", "latest", "1"])
    assert result.exit_code == 1
    assert "returned 401" in result.output


def test_invalid_config_reports_error(config_home):
    path = default_config_path()
    path.parent.mkdir(parents=True)
    path.write_text("recurring_tasks: {not: [a list\n", encoding="utf-8")
    result = runner.invoke(app, ["get", "tasks"])
    assert result.exit_code == 1
    assert "Error:" in result.output
