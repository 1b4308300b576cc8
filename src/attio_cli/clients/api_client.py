"""HTTP client for the Attio REST API."""

from __future__ import annotations

import json
from types import TracebackType
from typing import Any

import requests
from requests.exceptions import RequestException
from structlog.stdlib import BoundLogger

from attio_cli.clients.entities import (
    AttributesClient,
    CommentsClient,
    EntriesClient,
    ListsClient,
    MeetingsClient,
    MembersClient,
    NotesClient,
    ObjectsClient,
    RecordsClient,
    TasksClient,
    ThreadsClient,
    WebhooksClient,
)
from attio_cli.clients.exceptions import ResponseDecodeError, TransportError, parse_api_error
from attio_cli.clients.http.paths import path_part, with_query
from attio_cli.clients.http.retry import RetryTransport
from attio_cli.config.models import HTTPClientConfig
from attio_cli.core.log_events import LogEvents
from attio_cli.core.logger import UnifiedLogger

__all__ = ["AttioClient", "path_part", "with_query"]


class AttioClient:
    """Authenticated JSON client with retries and resource helpers.

    Every request goes through a :class:`RetryTransport` mounted on the
    session, so 429/5xx responses and connection errors are retried with the
    configured budget before an error reaches the caller.
    """

    def __init__(
        self,
        config: HTTPClientConfig,
        api_key: str | None = None,
        *,
        session: requests.Session | None = None,
        transport: RetryTransport | None = None,
    ) -> None:
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self._api_key = (api_key or "").strip()
        self._session = session or requests.Session()
        self._transport = transport or RetryTransport(
            max_retries=config.max_retries,
            total_timeout=config.timeout_sec,
        )
        self._session.mount("https://", self._transport)
        self._session.mount("http://", self._transport)
        self._session.headers.update(self._default_headers())
        self._logger: BoundLogger = UnifiedLogger.get(__name__).bind(component="http_client")

        self.objects = ObjectsClient(self)
        self.records = RecordsClient(self)
        self.lists = ListsClient(self)
        self.entries = EntriesClient(self)
        self.notes = NotesClient(self)
        self.tasks = TasksClient(self)
        self.comments = CommentsClient(self)
        self.threads = ThreadsClient(self)
        self.webhooks = WebhooksClient(self)
        self.meetings = MeetingsClient(self)
        self.attributes = AttributesClient(self)
        self.members = MembersClient(self)

    def _default_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.config.user_agent:
            headers["User-Agent"] = self.config.user_agent
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> AttioClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Request execution
    # ------------------------------------------------------------------

    def request(self, method: str, path: str, body: Any | None = None) -> Any:
        """Send one logical request and return the decoded JSON payload.

        ``body`` is serialised to bytes up front so every retry replays the
        same payload.  A 204 or empty response yields ``None``.

        Raises
        ------
        AttioAPIError
            The final response had a status of 400 or above.
        TransportError
            No response could be obtained.
        ResponseDecodeError
            A successful response body was not valid JSON.
        """

        data: bytes | None = None
        if body is not None:
            try:
                data = json.dumps(body).encode("utf-8")
            except (TypeError, ValueError) as exc:
                raise TransportError(f"marshal request: {exc}") from exc

        url = f"{self.base_url}{path}"
        try:
            response = self._session.request(method, url, data=data)
        except RequestException as exc:
            self._logger.debug(
                LogEvents.HTTP_REQUEST_FAILED,
                method=method,
                path=path,
                error=str(exc),
            )
            raise TransportError(f"execute request: {exc}") from exc

        with response:
            self._logger.debug(
                LogEvents.HTTP_REQUEST_COMPLETED,
                method=method,
                path=path,
                status_code=response.status_code,
                elapsed_ms=int(response.elapsed.total_seconds() * 1000),
            )
            if response.status_code >= 400:
                raise parse_api_error(response)
            if response.status_code == 204 or not response.content.strip():
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise ResponseDecodeError(f"decode response: {exc}") from exc

    def get_self(self) -> dict[str, Any]:
        """Return the token introspection payload of ``GET /v2/self``."""

        payload = self.request("GET", "/v2/self")
        return payload if isinstance(payload, dict) else {}
