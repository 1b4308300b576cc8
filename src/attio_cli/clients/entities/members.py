"""Workspace member endpoints (``/v2/workspace_members``)."""

from __future__ import annotations

from attio_cli.clients.http.paths import path_part

from .base import BaseResourceClient, JSONList, JSONObject

__all__ = ["MembersClient"]


class MembersClient(BaseResourceClient):
    def list(self) -> JSONList:
        return self._items("GET", "/v2/workspace_members")

    def get(self, member_id: str) -> JSONObject:
        return self._object("GET", f"/v2/workspace_members/{path_part(member_id)}")
