"""Meeting, call recording and transcript endpoints.

These endpoints paginate with an opaque cursor: each list method returns the
page items together with ``pagination.next_cursor`` (``""`` on the last page)
so it can be handed straight to
:func:`attio_cli.clients.http.pagination.fetch_all_cursor`.
"""

from __future__ import annotations

from attio_cli.clients.http.paths import path_part, with_query

from .base import BaseResourceClient, CursorPage, JSONObject, data_body, page_params, text_param

__all__ = ["MeetingsClient"]


class MeetingsClient(BaseResourceClient):
    def list(
        self,
        *,
        limit: int = 0,
        cursor: str = "",
        sort: str | None = None,
        participants: str | None = None,
        linked_object: str | None = None,
        linked_record_id: str | None = None,
        ends_from: str | None = None,
        starts_before: str | None = None,
        timezone: str | None = None,
    ) -> CursorPage:
        path = with_query(
            "/v2/meetings",
            {
                "limit": page_params(limit)["limit"],
                "cursor": text_param(cursor),
                "sort": text_param(sort),
                "participants": text_param(participants),
                "linked_object": text_param(linked_object),
                "linked_record_id": text_param(linked_record_id),
                "ends_from": text_param(ends_from),
                "starts_before": text_param(starts_before),
                "timezone": text_param(timezone),
            },
        )
        return self._cursor_page(path)

    def find_or_create(self, data: JSONObject) -> JSONObject:
        return self._object("POST", "/v2/meetings", data_body(data))

    def get(self, meeting_id: str) -> JSONObject:
        return self._object("GET", f"/v2/meetings/{path_part(meeting_id)}")

    @staticmethod
    def _recordings(meeting_id: str) -> str:
        return f"/v2/meetings/{path_part(meeting_id)}/call_recordings"

    def list_recordings(self, meeting_id: str, *, limit: int = 0, cursor: str = "") -> CursorPage:
        path = with_query(
            self._recordings(meeting_id),
            {"limit": page_params(limit)["limit"], "cursor": text_param(cursor)},
        )
        return self._cursor_page(path)

    def create_recording(self, meeting_id: str, data: JSONObject) -> JSONObject:
        return self._object("POST", self._recordings(meeting_id), data_body(data))

    def get_recording(self, meeting_id: str, recording_id: str) -> JSONObject:
        return self._object("GET", f"{self._recordings(meeting_id)}/{path_part(recording_id)}")

    def delete_recording(self, meeting_id: str, recording_id: str) -> None:
        self._delete(f"{self._recordings(meeting_id)}/{path_part(recording_id)}")

    def transcript(self, meeting_id: str, recording_id: str, *, cursor: str = "") -> CursorPage:
        path = with_query(
            f"{self._recordings(meeting_id)}/{path_part(recording_id)}/transcript",
            {"cursor": text_param(cursor)},
        )
        return self._cursor_page(path)
