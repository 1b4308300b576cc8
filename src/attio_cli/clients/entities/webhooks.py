"""Webhook endpoints (``/v2/webhooks``)."""

from __future__ import annotations

from attio_cli.clients.http.paths import path_part, with_query

from .base import BaseResourceClient, JSONList, JSONObject, data_body, page_params

__all__ = ["WebhooksClient"]


class WebhooksClient(BaseResourceClient):
    def list(self, *, limit: int = 0, offset: int = 0) -> JSONList:
        return self._items("GET", with_query("/v2/webhooks", page_params(limit, offset)))

    def create(self, data: JSONObject) -> JSONObject:
        return self._object("POST", "/v2/webhooks", data_body(data))

    def get(self, webhook_id: str) -> JSONObject:
        return self._object("GET", f"/v2/webhooks/{path_part(webhook_id)}")

    def update(self, webhook_id: str, data: JSONObject) -> JSONObject:
        return self._object("PATCH", f"/v2/webhooks/{path_part(webhook_id)}", data_body(data))

    def delete(self, webhook_id: str) -> None:
        self._delete(f"/v2/webhooks/{path_part(webhook_id)}")
