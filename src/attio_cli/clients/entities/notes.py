"""Note endpoints (``/v2/notes``)."""

from __future__ import annotations

from attio_cli.clients.http.paths import path_part, with_query

from .base import BaseResourceClient, JSONList, JSONObject, data_body, page_params, text_param

__all__ = ["NotesClient"]


class NotesClient(BaseResourceClient):
    def list(
        self,
        *,
        parent_object: str | None = None,
        parent_record_id: str | None = None,
        limit: int = 0,
        offset: int = 0,
    ) -> JSONList:
        path = with_query(
            "/v2/notes",
            {
                "parent_object": text_param(parent_object),
                "parent_record_id": text_param(parent_record_id),
                **page_params(limit, offset),
            },
        )
        return self._items("GET", path)

    def create(self, data: JSONObject) -> JSONObject:
        return self._object("POST", "/v2/notes", data_body(data))

    def get(self, note_id: str) -> JSONObject:
        return self._object("GET", f"/v2/notes/{path_part(note_id)}")

    def delete(self, note_id: str) -> None:
        self._delete(f"/v2/notes/{path_part(note_id)}")
