"""Subscription, command and retrieval calls made under the bearer token."""

from __future__ import annotations

import json
import logging
from typing import Any

from .auth import S30AuthSession
from .const import (
    CLOUD_PUBLISH_URL,
    CLOUD_REQUESTDATA_URL,
    CLOUD_RETRIEVE_URL,
    DEFAULT_MESSAGE_COUNT,
    HOME_DATA_PATH,
    SYSTEM_DATA_PATH,
)
from .errors import S30ResponseError, S30Unauthorized
from .http import S30HttpClient, S30Response
from .protocol import (
    build_command,
    build_request_data,
    parse_retrieved_messages,
    sender_id,
)

_LOGGER = logging.getLogger(__name__)

_JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class S30Channel:
    """Request-data, publish and retrieve calls for one account."""

    def __init__(self, http: S30HttpClient, auth: S30AuthSession) -> None:
        self._http = http
        self._auth = auth

    @property
    def sender_id(self) -> str:
        return sender_id(self._auth.app_id, self._auth.email)

    def _token(self) -> str:
        token = self._auth.bearer_token
        if not token:
            raise S30Unauthorized("Not logged in")
        return token

    async def request_data(self, system_id: str, json_path: str) -> None:
        """Ask ``system_id`` to publish the data under ``json_path``."""
        token = self._token()
        body = build_request_data(
            sender=self.sender_id, target_id=system_id, json_path=json_path
        )
        _LOGGER.debug("[%s] Requesting data: %s", system_id, json_path)
        resp = await self._http.post(
            CLOUD_REQUESTDATA_URL,
            headers={"Authorization": token, "Content-Type": _JSON_CONTENT_TYPE},
            data=json.dumps(body),
        )
        _check_response(resp, "RequestData")

    async def subscribe(self, system_id: str) -> None:
        """Request the system data set, then the home data set."""
        _LOGGER.debug("[%s] Subscribing", system_id)
        try:
            await self.request_data(system_id, SYSTEM_DATA_PATH)
            await self.request_data(system_id, HOME_DATA_PATH)
        except Exception as err:
            _LOGGER.error("[%s] Failed to subscribe: %s", system_id, err)
            raise
        _LOGGER.info("[%s] Subscribed", system_id)

    async def publish(self, system_id: str, data: dict[str, Any]) -> None:
        """Publish a command payload to ``system_id``."""
        token = self._token()
        body = build_command(sender=self.sender_id, target_id=system_id, data=data)
        _LOGGER.debug("[%s] Publishing command %s", system_id, body["MessageID"])
        resp = await self._http.post(
            CLOUD_PUBLISH_URL,
            headers={"Authorization": token, "Content-Type": _JSON_CONTENT_TYPE},
            data=json.dumps(body),
        )
        _check_response(resp, "Publish")

    async def retrieve(
        self, message_count: int = DEFAULT_MESSAGE_COUNT
    ) -> list[dict[str, Any]]:
        """Fetch up to ``message_count`` queued messages, oldest first.

        A single bounded fetch without long polling; no content is an empty
        list.
        """
        token = self._token()
        resp = await self._http.get(
            CLOUD_RETRIEVE_URL,
            headers={"Authorization": token},
            params={
                "Direction": "Oldest-to-Newest",
                "MessageCount": str(message_count),
                "StartTime": "1",
                "LongPollingTimeout": "0",
            },
        )
        if resp.status == 204:
            return []
        _check_response(resp, "Retrieve")
        return parse_retrieved_messages(resp.data)


def _check_response(resp: S30Response, operation: str) -> None:
    if resp.status == 200:
        return
    if resp.status == 401:
        raise S30Unauthorized(
            f"{operation} unauthorized - token may have expired", status=401
        )
    raise S30ResponseError(
        resp.status,
        f"{operation} failed - status [{resp.status}] response [{resp.text}]",
    )
