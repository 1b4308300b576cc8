"""Comment endpoints (``/v2/comments``)."""

from __future__ import annotations

from attio_cli.clients.http.paths import path_part

from .base import BaseResourceClient, JSONObject, data_body

__all__ = ["CommentsClient"]


class CommentsClient(BaseResourceClient):
    def create(self, data: JSONObject) -> JSONObject:
        return self._object("POST", "/v2/comments", data_body(data))

    def get(self, comment_id: str) -> JSONObject:
        return self._object("GET", f"/v2/comments/{path_part(comment_id)}")

    def delete(self, comment_id: str) -> None:
        self._delete(f"/v2/comments/{path_part(comment_id)}")
