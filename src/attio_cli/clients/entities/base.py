"""Shared plumbing for the per-resource Attio clients."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from attio_cli.clients.api_client import AttioClient

__all__ = [
    "BaseResourceClient",
    "CursorPage",
    "JSONList",
    "JSONObject",
    "bool_param",
    "data_body",
    "next_cursor",
    "page_params",
    "text_param",
    "unwrap_data",
]

JSONObject = dict[str, Any]
JSONList = list[JSONObject]
CursorPage = tuple[JSONList, str]


def unwrap_data(payload: Any) -> Any:
    """Return ``payload["data"]`` for ``{"data": ...}`` envelopes."""

    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def next_cursor(payload: Any) -> str:
    """Return ``pagination.next_cursor`` or ``""`` when absent or null."""

    if not isinstance(payload, dict):
        return ""
    pagination = payload.get("pagination")
    if not isinstance(pagination, dict):
        return ""
    cursor = pagination.get("next_cursor")
    return cursor if isinstance(cursor, str) else ""


def page_params(limit: int = 0, offset: int = 0) -> dict[str, int | None]:
    return {
        "limit": limit if limit > 0 else None,
        "offset": offset if offset > 0 else None,
    }


def text_param(value: str | None) -> str | None:
    if value is None:
        return None
    return value if value.strip() else None


def bool_param(value: bool | None, *, only_true: bool = True) -> str | None:
    """Render a boolean query flag; by default ``False`` is omitted."""
    if value is None:
        return None
    if only_true and not value:
        return None
    return "true" if value else "false"


def data_body(data: Any) -> JSONObject:
    return {"data": data}


class BaseResourceClient:
    """Resource helper bound to one :class:`AttioClient`."""

    def __init__(self, client: AttioClient) -> None:
        self._client = client

    def _data(self, method: str, path: str, body: Any | None = None) -> Any:
        return unwrap_data(self._client.request(method, path, body))

    def _object(self, method: str, path: str, body: Any | None = None) -> JSONObject:
        data = self._data(method, path, body)
        return data if isinstance(data, dict) else {}

    def _items(self, method: str, path: str, body: Any | None = None) -> JSONList:
        data = self._data(method, path, body)
        return list(data) if isinstance(data, list) else []

    def _cursor_page(self, path: str) -> CursorPage:
        payload = self._client.request("GET", path)
        data = unwrap_data(payload)
        items = list(data) if isinstance(data, list) else []
        return items, next_cursor(payload)

    def _delete(self, path: str) -> None:
        self._client.request("DELETE", path)
