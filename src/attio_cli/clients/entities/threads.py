"""Comment thread endpoints (``/v2/threads``)."""

from __future__ import annotations

from attio_cli.clients.http.paths import path_part, with_query

from .base import BaseResourceClient, JSONList, JSONObject, page_params, text_param

__all__ = ["ThreadsClient"]


class ThreadsClient(BaseResourceClient):
    def list(
        self,
        *,
        obj: str | None = None,
        record_id: str | None = None,
        list_id: str | None = None,
        entry_id: str | None = None,
        limit: int = 0,
        offset: int = 0,
    ) -> JSONList:
        path = with_query(
            "/v2/threads",
            {
                "object": text_param(obj),
                "record_id": text_param(record_id),
                "list": text_param(list_id),
                "entry_id": text_param(entry_id),
                **page_params(limit, offset),
            },
        )
        return self._items("GET", path)

    def get(self, thread_id: str) -> JSONObject:
        return self._object("GET", f"/v2/threads/{path_part(thread_id)}")
