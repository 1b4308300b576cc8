"""List entry endpoints (``/v2/lists/{list}/entries``)."""

from __future__ import annotations

from typing import Any

from attio_cli.clients.http.paths import path_part, with_query

from .base import BaseResourceClient, JSONList, JSONObject, bool_param, data_body, page_params
from .records import query_body

__all__ = ["EntriesClient"]


class EntriesClient(BaseResourceClient):
    @staticmethod
    def _base(list_id: str) -> str:
        return f"/v2/lists/{path_part(list_id)}/entries"

    def _path(self, list_id: str, entry_id: str) -> str:
        return f"{self._base(list_id)}/{path_part(entry_id)}"

    def create(self, list_id: str, data: JSONObject) -> JSONObject:
        return self._object("POST", self._base(list_id), data_body(data))

    def assert_(self, list_id: str, data: JSONObject) -> JSONObject:
        return self._object("PUT", self._base(list_id), data_body(data))

    def query(
        self,
        list_id: str,
        *,
        filter: Any | None = None,
        sorts: Any | None = None,
        limit: int = 0,
        offset: int = 0,
    ) -> JSONList:
        body = query_body(filter, sorts, limit, offset)
        return self._items("POST", f"{self._base(list_id)}/query", body)

    def get(self, list_id: str, entry_id: str) -> JSONObject:
        return self._object("GET", self._path(list_id, entry_id))

    def update(self, list_id: str, entry_id: str, data: JSONObject) -> JSONObject:
        return self._object("PATCH", self._path(list_id, entry_id), data_body(data))

    def replace(self, list_id: str, entry_id: str, data: JSONObject) -> JSONObject:
        return self._object("PUT", self._path(list_id, entry_id), data_body(data))

    def delete(self, list_id: str, entry_id: str) -> None:
        self._delete(self._path(list_id, entry_id))

    def list_attribute_values(
        self,
        list_id: str,
        entry_id: str,
        attribute: str,
        *,
        show_historic: bool = False,
        limit: int = 0,
        offset: int = 0,
    ) -> JSONList:
        path = with_query(
            f"{self._path(list_id, entry_id)}/attributes/{path_part(attribute)}/values",
            {"show_historic": bool_param(show_historic), **page_params(limit, offset)},
        )
        return self._items("GET", path)
