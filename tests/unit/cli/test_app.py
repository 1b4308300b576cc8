"""End-to-end tests of the ``attio`` command tree with a mocked API."""

from __future__ import annotations

import json
from pathlib import Path

import click
import pytest
import responses
import typer
import yaml
from responses import matchers
from typer.testing import CliRunner

from attio_cli import __version__
from attio_cli.cli.app import app, main
from attio_cli.cli.errors import ExitCode

BASE_URL = "https://attio.example.test"


@pytest.fixture
def api_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ATTIO_API_KEY", "env-key-123456")
    monkeypatch.setenv("ATTIO_BASE_URL", BASE_URL)


def _json_out(capsys: pytest.CaptureFixture[str]) -> dict:
    return json.loads(capsys.readouterr().out)


@pytest.mark.unit
def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["version"]) == ExitCode.SUCCESS
    assert capsys.readouterr().out.strip() == __version__

    assert main(["--json", "version"]) == ExitCode.SUCCESS
    assert _json_out(capsys) == {"version": __version__}


@pytest.mark.unit
def test_json_and_plain_conflict(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--json", "--plain", "version"]) == ExitCode.USAGE
    assert "--json and --plain cannot be used together" in capsys.readouterr().err


@pytest.mark.unit
def test_invalid_timeout_is_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--timeout", "soon", "version"]) == ExitCode.USAGE
    assert "invalid --timeout value" in capsys.readouterr().err


@pytest.mark.unit
def test_parse_error_rendered_as_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--json", "records", "get", "people"]) == ExitCode.USAGE

    error = json.loads(capsys.readouterr().err)["error"]
    assert error["kind"] == "usage"
    assert error["exit_code"] == 2


@pytest.mark.unit
def test_dry_run_needs_no_credentials(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--json", "--dry-run", "records", "create", "people", "--data", '{"values": {"name": "Ada"}}'])

    assert code == ExitCode.SUCCESS
    assert _json_out(capsys) == {
        "dry_run": True,
        "action": "records create",
        "data": {"object": "people", "data": {"values": {"name": "Ada"}}},
    }


@pytest.mark.unit
def test_missing_credentials_exit_code(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["records", "get", "people", "r1"]) == ExitCode.AUTH
    assert 'No API key found for profile "default"' in capsys.readouterr().err

    assert main(["--json", "records", "get", "people", "r1"]) == ExitCode.AUTH
    error = json.loads(capsys.readouterr().err)["error"]
    assert error["code"] == "auth_required"
    assert error["exit_code"] == 4


@pytest.mark.unit
def test_command_allowlist(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    assert main(["--enable-commands", "notes", "--dry-run", "records", "delete", "people", "r1"]) == ExitCode.USAGE
    assert 'command "records delete" is not enabled' in capsys.readouterr().err

    monkeypatch.setenv("ATTIO_ENABLE_COMMANDS", "records delete")
    assert main(["--dry-run", "records", "delete", "people", "r1"]) == ExitCode.SUCCESS
    assert "[dry-run] records delete" in capsys.readouterr().out


@pytest.mark.unit
@responses.activate
@pytest.mark.usefixtures("api_env")
def test_records_query_json(capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/v2/objects/people/records/query",
        json={"data": [{"id": {"record_id": "r1"}}, {"id": {"record_id": "r2"}}]},
        match=[matchers.json_params_matcher({"filter": {"name": "Ada"}, "limit": 2})],
    )

    code = main(["--json", "records", "query", "people", "--filter", '{"name": "Ada"}', "--limit", "2"])

    assert code == ExitCode.SUCCESS
    assert _json_out(capsys) == {
        "data": [{"id": {"record_id": "r1"}}, {"id": {"record_id": "r2"}}],
        "pagination": {"limit": 2, "offset": 0, "has_more": True},
    }
    assert responses.calls[0].request.headers["Authorization"] == "Bearer env-key-123456"


@pytest.mark.unit
@responses.activate
@pytest.mark.usefixtures("api_env")
def test_query_alias_all_pages(capsys: pytest.CaptureFixture[str]) -> None:
    url = f"{BASE_URL}/v2/objects/people/records/query"
    responses.add(
        responses.POST,
        url,
        json={"data": [{"id": {"record_id": "r1"}}, {"id": {"record_id": "r2"}}]},
        match=[matchers.json_params_matcher({"limit": 2, "offset": 10})],
    )
    responses.add(
        responses.POST,
        url,
        json={"data": [{"id": {"record_id": "r3"}}]},
        match=[matchers.json_params_matcher({"limit": 2, "offset": 12})],
    )

    code = main(["--json", "query", "people", "--limit", "2", "--offset", "10", "--all"])

    assert code == ExitCode.SUCCESS
    payload = _json_out(capsys)
    assert [item["id"]["record_id"] for item in payload["data"]] == ["r1", "r2", "r3"]
    assert payload["pagination"] == {"limit": 2, "offset": 10, "has_more": False}


@pytest.mark.unit
@responses.activate
@pytest.mark.usefixtures("api_env")
def test_plain_output_and_results_only(capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/v2/objects",
        json={"data": [{"id": {"object_id": "o1"}, "api_slug": "people", "singular_noun": "Person"}]},
    )
    responses.add(
        responses.GET,
        f"{BASE_URL}/v2/objects",
        json={"data": [{"id": {"object_id": "o1"}, "api_slug": "people"}]},
    )

    assert main(["--plain", "objects", "list"]) == ExitCode.SUCCESS
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split("\t")[0] == "ID"
    assert lines[1].split("\t")[:2] == ["o1", "people"]

    assert main(["--json", "--results-only", "objects", "list"]) == ExitCode.SUCCESS
    assert _json_out(capsys) == [{"id": {"object_id": "o1"}, "api_slug": "people"}]


@pytest.mark.unit
@responses.activate
@pytest.mark.usefixtures("api_env")
def test_fail_empty(capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(responses.GET, f"{BASE_URL}/v2/lists", json={"data": []})

    assert main(["--fail-empty", "lists", "list"]) == ExitCode.NO_RESULT
    assert "No results" in capsys.readouterr().err


@pytest.mark.unit
@responses.activate
@pytest.mark.usefixtures("api_env")
def test_api_error_rendering(capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/v2/objects/people/records/missing",
        status=404,
        json={"type": "invalid_request_error", "code": "not_found", "message": "Record not found"},
    )

    assert main(["records", "get", "people", "missing"]) == ExitCode.GENERIC
    assert capsys.readouterr().err.strip() == "Attio API error (404) not_found: Record not found"


@pytest.mark.unit
@responses.activate
@pytest.mark.usefixtures("api_env")
def test_id_only_create(capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/v2/notes",
        json={"data": {"id": {"workspace_id": "w1", "note_id": "n42"}, "title": "Call"}},
    )

    code = main(
        [
            "--id-only",
            "notes",
            "create",
            "--parent-object",
            "people",
            "--parent-record",
            "r1",
            "--title",
            "Call",
            "--content",
            "Notes",
        ]
    )

    assert code == ExitCode.SUCCESS
    assert capsys.readouterr().out.strip() == "n42"
    assert json.loads(responses.calls[0].request.body)["data"]["format"] == "plaintext"


@pytest.mark.unit
@responses.activate
@pytest.mark.usefixtures("api_env")
def test_meetings_cursor_walk(capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/v2/meetings",
        json={"data": [{"id": {"meeting_id": "m1"}}], "pagination": {"next_cursor": "c2"}},
        match=[matchers.query_param_matcher({"limit": "1", "cursor": "c1"})],
    )
    responses.add(
        responses.GET,
        f"{BASE_URL}/v2/meetings",
        json={"data": [{"id": {"meeting_id": "m2"}}], "pagination": {"next_cursor": None}},
        match=[matchers.query_param_matcher({"limit": "1", "cursor": "c2"})],
    )

    assert main(["--json", "meetings", "list", "--limit", "1", "--cursor", "c1", "--all"]) == ExitCode.SUCCESS
    assert _json_out(capsys) == {"data": [{"id": {"meeting_id": "m1"}}, {"id": {"meeting_id": "m2"}}]}


@pytest.mark.unit
@responses.activate
@pytest.mark.usefixtures("api_env")
def test_delete_reports_target(capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(responses.DELETE, f"{BASE_URL}/v2/webhooks/wh1", status=204)

    assert main(["--json", "webhooks", "delete", "wh1"]) == ExitCode.SUCCESS
    assert _json_out(capsys) == {"deleted": True, "webhook_id": "wh1"}


@pytest.mark.unit
def test_auth_login_status_logout(capsys: pytest.CaptureFixture[str], config_file: Path) -> None:
    assert main(["--json", "auth", "login", "--api-key", "sk_test_abcdefgh"]) == ExitCode.SUCCESS
    assert _json_out(capsys) == {"saved": True, "profile": "default", "source": "config", "path": str(config_file)}
    assert yaml.safe_load(config_file.read_text(encoding="utf-8"))["profiles"]["default"]["api_key"] == "sk_test_abcdefgh"

    assert main(["--json", "auth", "status"]) == ExitCode.SUCCESS
    status = _json_out(capsys)
    assert status["resolved"] is True
    assert status["resolved_source"] == "config"
    assert status["masked_key"] == "************efgh"

    assert main(["--json", "auth", "logout"]) == ExitCode.SUCCESS
    assert _json_out(capsys) == {"removed": True, "profile": "default"}

    assert main(["--json", "auth", "status"]) == ExitCode.SUCCESS
    assert _json_out(capsys)["resolved"] is False


@pytest.mark.unit
def test_auth_login_dry_run_masks_key(capsys: pytest.CaptureFixture[str], config_file: Path) -> None:
    assert main(["--json", "--dry-run", "--profile", "work", "auth", "login", "--api-key", "sk_test_abcdefgh"]) == 0

    assert _json_out(capsys)["data"] == {"profile": "work", "api_key": "************efgh"}
    assert not config_file.exists()


@pytest.mark.unit
def test_broken_config_file_is_reported(capsys: pytest.CaptureFixture[str], config_file: Path) -> None:
    config_file.parent.mkdir(parents=True)
    config_file.write_text("profiles: [oops", encoding="utf-8")

    assert main(["auth", "status"]) == ExitCode.GENERIC
    assert "parse config" in capsys.readouterr().err


@pytest.mark.unit
def test_cli_runner_invocation() -> None:
    """The Typer app also works when driven through ``CliRunner``."""

    runner = CliRunner()

    result = runner.invoke(app, ["--json", "--dry-run", "notes", "delete", "n1"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"dry_run": True, "action": "notes delete", "data": {"note_id": "n1"}}

    result = runner.invoke(app, ["tasks", "update", "t1"])
    assert result.exit_code == ExitCode.USAGE


@pytest.mark.unit
def test_commands_share_the_click_context_stack() -> None:
    """Command state is looked up through ``click.get_current_context``."""

    assert isinstance(typer.main.get_command(app), click.Group)
    assert issubclass(typer.Context, click.Context)
