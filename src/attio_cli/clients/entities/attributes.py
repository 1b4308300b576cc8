"""Attribute, select option and status endpoints for objects and lists."""

from __future__ import annotations

from typing import Final

from attio_cli.clients.http.paths import path_part, with_query

from .base import BaseResourceClient, JSONList, JSONObject, bool_param, data_body, page_params

__all__ = ["ATTRIBUTE_TARGETS", "AttributesClient"]

ATTRIBUTE_TARGETS: Final[tuple[str, ...]] = ("objects", "lists")


class AttributesClient(BaseResourceClient):
    """Attributes of an object or a list, addressed by ``target``/``identifier``."""

    @staticmethod
    def _base(target: str, identifier: str) -> str:
        if target not in ATTRIBUTE_TARGETS:
            raise ValueError(f"attribute target must be one of {', '.join(ATTRIBUTE_TARGETS)}; got {target!r}")
        return f"/v2/{path_part(target)}/{path_part(identifier)}/attributes"

    def _attribute(self, target: str, identifier: str, attribute: str) -> str:
        return f"{self._base(target, identifier)}/{path_part(attribute)}"

    def list(
        self,
        target: str,
        identifier: str,
        *,
        show_archived: bool = False,
        limit: int = 0,
        offset: int = 0,
    ) -> JSONList:
        path = with_query(
            self._base(target, identifier),
            {"show_archived": bool_param(show_archived), **page_params(limit, offset)},
        )
        return self._items("GET", path)

    def create(self, target: str, identifier: str, data: JSONObject) -> JSONObject:
        return self._object("POST", self._base(target, identifier), data_body(data))

    def get(self, target: str, identifier: str, attribute: str) -> JSONObject:
        return self._object("GET", self._attribute(target, identifier, attribute))

    def update(self, target: str, identifier: str, attribute: str, data: JSONObject) -> JSONObject:
        return self._object("PATCH", self._attribute(target, identifier, attribute), data_body(data))

    def list_options(self, target: str, identifier: str, attribute: str, *, show_archived: bool = False) -> JSONList:
        path = with_query(
            f"{self._attribute(target, identifier, attribute)}/options",
            {"show_archived": bool_param(show_archived)},
        )
        return self._items("GET", path)

    def create_option(self, target: str, identifier: str, attribute: str, data: JSONObject) -> JSONObject:
        path = f"{self._attribute(target, identifier, attribute)}/options"
        return self._object("POST", path, data_body(data))

    def update_option(
        self, target: str, identifier: str, attribute: str, option: str, data: JSONObject
    ) -> JSONObject:
        path = f"{self._attribute(target, identifier, attribute)}/options/{path_part(option)}"
        return self._object("PATCH", path, data_body(data))

    def list_statuses(self, target: str, identifier: str, attribute: str, *, show_archived: bool = False) -> JSONList:
        path = with_query(
            f"{self._attribute(target, identifier, attribute)}/statuses",
            {"show_archived": bool_param(show_archived)},
        )
        return self._items("GET", path)

    def create_status(self, target: str, identifier: str, attribute: str, data: JSONObject) -> JSONObject:
        path = f"{self._attribute(target, identifier, attribute)}/statuses"
        return self._object("POST", path, data_body(data))

    def update_status(
        self, target: str, identifier: str, attribute: str, status: str, data: JSONObject
    ) -> JSONObject:
        path = f"{self._attribute(target, identifier, attribute)}/statuses/{path_part(status)}"
        return self._object("PATCH", path, data_body(data))
