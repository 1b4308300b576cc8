"""List schema endpoints (``/v2/lists``)."""

from __future__ import annotations

from attio_cli.clients.http.paths import path_part

from .base import BaseResourceClient, JSONList, JSONObject, data_body

__all__ = ["ListsClient"]


class ListsClient(BaseResourceClient):
    def list(self) -> JSONList:
        return self._items("GET", "/v2/lists")

    def create(self, data: JSONObject) -> JSONObject:
        return self._object("POST", "/v2/lists", data_body(data))

    def get(self, list_id: str) -> JSONObject:
        return self._object("GET", f"/v2/lists/{path_part(list_id)}")

    def update(self, list_id: str, data: JSONObject) -> JSONObject:
        return self._object("PATCH", f"/v2/lists/{path_part(list_id)}", data_body(data))
