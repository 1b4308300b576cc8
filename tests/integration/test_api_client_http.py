"""AttioClient and the ``attio`` CLI against a real local HTTP server."""

from __future__ import annotations

import json
import threading
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import ClassVar
from urllib.parse import parse_qs, urlsplit

import pytest

from attio_cli.cli.app import main
from attio_cli.cli.errors import ExitCode
from attio_cli.clients.api_client import AttioClient
from attio_cli.clients.exceptions import AttioAPIError, is_auth_error
from attio_cli.clients.http.pagination import PageFetchError, fetch_all_cursor, fetch_all_offset
from attio_cli.clients.http.retry import RetryTransport
from attio_cli.config.models import HTTPClientConfig

pytestmark = pytest.mark.integration

PEOPLE = [{"id": {"record_id": f"r{index}"}, "values": {"name": [{"value": f"Person {index}"}]}} for index in range(7)]
MEETING_PAGES = {
    "": ([{"id": {"meeting_id": "m1"}}, {"id": {"meeting_id": "m2"}}], "c1"),
    "c1": ([{"id": {"meeting_id": "m3"}}], None),
}


class _AttioHandler(BaseHTTPRequestHandler):
    """Serves a tiny slice of the Attio API with scripted failures."""

    request_counts: ClassVar[dict[str, int]] = {}
    bodies: ClassVar[list[bytes]] = []
    auth_headers: ClassVar[list[str]] = []

    def log_message(self, _format: str, *args: object) -> None:  # pragma: no cover - quiet server
        return

    def _send_json(self, status: int, payload: object, *, headers: dict[str, str] | None = None) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        for key, value in (headers or {}).items():
            self.send_header(key, value)
        self.end_headers()
        self.wfile.write(body)

    def _count(self, path: str) -> int:
        count = self.request_counts.get(path, 0)
        self.request_counts[path] = count + 1
        return count

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.bodies.append(body)
        return body

    def do_GET(self) -> None:  # noqa: N802 - required by BaseHTTPRequestHandler
        self.auth_headers.append(self.headers.get("Authorization", ""))
        parts = urlsplit(self.path)
        count = self._count(parts.path)

        if parts.path == "/v2/self":
            if count == 0:
                self._send_json(429, {"message": "slow down"}, headers={"Retry-After": "1"})
                return
            self._send_json(200, {"active": True, "workspace_name": "Integration"})
            return

        if parts.path == "/v2/meetings":
            cursor = parse_qs(parts.query).get("cursor", [""])[0]
            if cursor not in MEETING_PAGES:
                self._send_json(400, {"code": "invalid_cursor", "message": "unknown cursor"})
                return
            items, next_cursor = MEETING_PAGES[cursor]
            self._send_json(200, {"data": items, "pagination": {"next_cursor": next_cursor}})
            return

        if parts.path == "/v2/workspace_members":
            self._send_json(401, {"type": "auth_error", "code": "invalid_token", "message": "Token revoked"})
            return

        self._send_json(404, {"code": "not_found", "message": f"no route for {parts.path}"})

    def do_POST(self) -> None:  # noqa: N802 - required by BaseHTTPRequestHandler
        parts = urlsplit(self.path)
        count = self._count(parts.path)
        payload = json.loads(self._read_body() or b"{}")

        if parts.path == "/v2/objects/people/records/query":
            offset = payload.get("offset", 0)
            limit = payload.get("limit", 500)
            if offset >= 6:
                self._send_json(500, {"message": "shard unavailable"})
                return
            self._send_json(200, {"data": PEOPLE[offset : offset + limit]})
            return

        if parts.path == "/v2/notes":
            if count == 0:
                self._send_json(503, {"message": "warming up"})
                return
            self._send_json(200, {"data": {"id": {"note_id": "n1"}, **payload["data"]}})
            return

        self._send_json(404, {"code": "not_found", "message": f"no route for {parts.path}"})


@pytest.fixture(name="live_server")
def _live_server() -> Iterator[ThreadingHTTPServer]:
    """Yield a live HTTP server hosting the Attio handler."""

    _AttioHandler.request_counts = {}
    _AttioHandler.bodies = []
    _AttioHandler.auth_headers = []
    server = ThreadingHTTPServer(("127.0.0.1", 0), _AttioHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        thread.join()


@pytest.fixture
def base_url(live_server: ThreadingHTTPServer) -> str:
    host, port = live_server.server_address[:2]
    return f"http://{host}:{port}"


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def client(base_url: str, sleeps: list[float]) -> Iterator[AttioClient]:
    transport = RetryTransport(max_retries=2, total_timeout=10, sleep=sleeps.append)
    with AttioClient(HTTPClientConfig(base_url=base_url, timeout_sec=10), "live-key", transport=transport) as attio:
        yield attio


def test_retry_after_is_honoured(client: AttioClient, sleeps: list[float]) -> None:
    """A 429 with Retry-After is retried and the caller only sees the success."""

    assert client.get_self() == {"active": True, "workspace_name": "Integration"}
    assert _AttioHandler.request_counts["/v2/self"] == 2
    assert sleeps == [1.0]
    assert set(_AttioHandler.auth_headers) == {"Bearer live-key"}


def test_server_error_retry_replays_body(client: AttioClient, sleeps: list[float]) -> None:
    note = client.notes.create({"title": "Retry", "content": "body survives"})

    assert note["id"] == {"note_id": "n1"}
    assert note["title"] == "Retry"
    assert len(_AttioHandler.bodies) == 2
    assert _AttioHandler.bodies[0] == _AttioHandler.bodies[1]
    assert sleeps == [0.25]


def test_offset_pagination_partial_failure(client: AttioClient) -> None:
    """A failing third page surfaces with the first two pages attached."""

    with pytest.raises(PageFetchError) as excinfo:
        fetch_all_offset(lambda offset: client.records.query("people", limit=3, offset=offset), page_size=3)

    assert [item["id"]["record_id"] for item in excinfo.value.items] == ["r0", "r1", "r2", "r3", "r4", "r5"]
    assert excinfo.value.pages_fetched == 2
    assert isinstance(excinfo.value.cause, AttioAPIError)
    assert excinfo.value.cause.status_code == 500


def test_offset_pagination_stops_on_short_page(client: AttioClient) -> None:
    items = fetch_all_offset(lambda offset: client.records.query("people", limit=4, offset=offset), page_size=4)

    assert len(items) == 7


def test_cursor_pagination(client: AttioClient) -> None:
    items = fetch_all_cursor(lambda cursor: client.meetings.list(limit=2, cursor=cursor))

    assert [item["id"]["meeting_id"] for item in items] == ["m1", "m2", "m3"]


def test_auth_error_is_classified(client: AttioClient) -> None:
    with pytest.raises(AttioAPIError) as excinfo:
        client.members.list()

    assert is_auth_error(excinfo.value)
    assert excinfo.value.code == "invalid_token"


def test_cli_records_query_against_server(
    monkeypatch: pytest.MonkeyPatch, base_url: str, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("ATTIO_API_KEY", "cli-key")
    monkeypatch.setenv("ATTIO_BASE_URL", base_url)

    code = main(["--json", "--results-only", "--select", "id.record_id", "records", "query", "people", "--limit", "2"])

    assert code == ExitCode.SUCCESS
    assert json.loads(capsys.readouterr().out) == [{"id.record_id": "r0"}, {"id.record_id": "r1"}]


def test_cli_all_pages_failure_reports_api_error(
    monkeypatch: pytest.MonkeyPatch, base_url: str, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("ATTIO_API_KEY", "cli-key")
    monkeypatch.setenv("ATTIO_BASE_URL", base_url)

    code = main(["--json", "records", "query", "people", "--limit", "3", "--offset", "3", "--all", "--max-pages", "5"])

    assert code == ExitCode.GENERIC
    error = json.loads(capsys.readouterr().err)["error"]
    assert error["status_code"] == 500
    assert error["message"] == "shard unavailable"


def test_cli_auth_failure_hint(monkeypatch: pytest.MonkeyPatch, base_url: str, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("ATTIO_API_KEY", "revoked")
    monkeypatch.setenv("ATTIO_BASE_URL", base_url)

    assert main(["members", "list"]) == ExitCode.GENERIC
    assert capsys.readouterr().err.splitlines() == [
        "Attio API error (401) invalid_token: Token revoked",
        "Check ATTIO_API_KEY or run: attio auth login --api-key <key>",
    ]
