"""Object schema endpoints (``/v2/objects``)."""

from __future__ import annotations

from attio_cli.clients.http.paths import path_part

from .base import BaseResourceClient, JSONList, JSONObject, data_body

__all__ = ["ObjectsClient"]


class ObjectsClient(BaseResourceClient):
    def list(self) -> JSONList:
        return self._items("GET", "/v2/objects")

    def create(self, data: JSONObject) -> JSONObject:
        return self._object("POST", "/v2/objects", data_body(data))

    def get(self, obj: str) -> JSONObject:
        return self._object("GET", f"/v2/objects/{path_part(obj)}")

    def update(self, obj: str, data: JSONObject) -> JSONObject:
        return self._object("PATCH", f"/v2/objects/{path_part(obj)}", data_body(data))
