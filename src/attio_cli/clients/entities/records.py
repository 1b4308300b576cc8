"""Record endpoints nested under an object (``/v2/objects/{object}/records``)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from attio_cli.clients.http.paths import path_part, with_query

from .base import BaseResourceClient, JSONList, JSONObject, bool_param, data_body, page_params

__all__ = ["RecordsClient", "query_body"]


def query_body(filter: Any | None, sorts: Any | None, limit: int, offset: int) -> JSONObject:
    """Build the body shared by record and entry ``query`` endpoints."""

    body: JSONObject = {}
    if filter is not None:
        body["filter"] = filter
    if sorts is not None:
        body["sorts"] = sorts
    if limit > 0:
        body["limit"] = limit
    if offset > 0:
        body["offset"] = offset
    return body


class RecordsClient(BaseResourceClient):
    """Create, query and mutate records of one object."""

    @staticmethod
    def _base(obj: str) -> str:
        return f"/v2/objects/{path_part(obj)}/records"

    def _path(self, obj: str, record_id: str) -> str:
        return f"{self._base(obj)}/{path_part(record_id)}"

    def create(self, obj: str, data: JSONObject) -> JSONObject:
        return self._object("POST", self._base(obj), data_body(data))

    def assert_(self, obj: str, matching_attribute: str, data: JSONObject) -> JSONObject:
        """Create or update the record matched on ``matching_attribute``."""
        path = with_query(self._base(obj), {"matching_attribute": matching_attribute or None})
        return self._object("PUT", path, data_body(data))

    def query(
        self,
        obj: str,
        *,
        filter: Any | None = None,
        sorts: Any | None = None,
        limit: int = 0,
        offset: int = 0,
    ) -> JSONList:
        body = query_body(filter, sorts, limit, offset)
        return self._items("POST", f"{self._base(obj)}/query", body)

    def search(
        self,
        query: str,
        *,
        objects: Sequence[str] = (),
        limit: int = 0,
        request_as: Any | None = None,
    ) -> JSONList:
        body: JSONObject = {
            "query": query,
            "objects": list(objects),
            "request_as": request_as if request_as is not None else {"type": "workspace"},
        }
        if limit > 0:
            body["limit"] = limit
        return self._items("POST", "/v2/objects/records/search", body)

    def get(self, obj: str, record_id: str) -> JSONObject:
        return self._object("GET", self._path(obj, record_id))

    def update(self, obj: str, record_id: str, data: JSONObject) -> JSONObject:
        return self._object("PATCH", self._path(obj, record_id), data_body(data))

    def replace(self, obj: str, record_id: str, data: JSONObject) -> JSONObject:
        return self._object("PUT", self._path(obj, record_id), data_body(data))

    def delete(self, obj: str, record_id: str) -> None:
        self._delete(self._path(obj, record_id))

    def list_attribute_values(
        self,
        obj: str,
        record_id: str,
        attribute: str,
        *,
        show_historic: bool = False,
        limit: int = 0,
        offset: int = 0,
    ) -> JSONList:
        path = with_query(
            f"{self._path(obj, record_id)}/attributes/{path_part(attribute)}/values",
            {"show_historic": bool_param(show_historic), **page_params(limit, offset)},
        )
        return self._items("GET", path)

    def list_entries(self, obj: str, record_id: str, *, limit: int = 0, offset: int = 0) -> JSONList:
        path = with_query(f"{self._path(obj, record_id)}/entries", page_params(limit, offset))
        return self._items("GET", path)
