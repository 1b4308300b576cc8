"""Task endpoints (``/v2/tasks``)."""

from __future__ import annotations

from attio_cli.clients.http.paths import path_part, with_query

from .base import (
    BaseResourceClient,
    JSONList,
    JSONObject,
    bool_param,
    data_body,
    page_params,
    text_param,
)

__all__ = ["TasksClient"]


class TasksClient(BaseResourceClient):
    def list(
        self,
        *,
        limit: int = 0,
        offset: int = 0,
        sort: str | None = None,
        linked_object: str | None = None,
        linked_record_id: str | None = None,
        assignee: str | None = None,
        is_completed: bool | None = None,
    ) -> JSONList:
        """List tasks; ``is_completed=None`` leaves completion unfiltered."""
        path = with_query(
            "/v2/tasks",
            {
                **page_params(limit, offset),
                "sort": text_param(sort),
                "linked_object": text_param(linked_object),
                "linked_record_id": text_param(linked_record_id),
                "assignee": text_param(assignee),
                "is_completed": bool_param(is_completed, only_true=False),
            },
        )
        return self._items("GET", path)

    def create(self, data: JSONObject) -> JSONObject:
        return self._object("POST", "/v2/tasks", data_body(data))

    def get(self, task_id: str) -> JSONObject:
        return self._object("GET", f"/v2/tasks/{path_part(task_id)}")

    def update(self, task_id: str, data: JSONObject) -> JSONObject:
        return self._object("PATCH", f"/v2/tasks/{path_part(task_id)}", data_body(data))

    def delete(self, task_id: str) -> None:
        self._delete(f"/v2/tasks/{path_part(task_id)}")
