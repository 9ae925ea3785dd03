"""Pytest configuration and fixtures for lennox_s30 tests."""

from __future__ import annotations

import json
import time
from collections import defaultdict
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from lennox_s30 import S30Config
from lennox_s30.const import (
    CLOUD_AUTHENTICATE_URL,
    CLOUD_LOGIN_URL,
    CLOUD_PUBLISH_URL,
    CLOUD_REQUESTDATA_URL,
    CLOUD_RETRIEVE_URL,
)


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a mock aiohttp ClientSession."""
    import aiohttp

    return MagicMock(spec=aiohttp.ClientSession)


@pytest.fixture
def config() -> S30Config:
    """Config with no waiting between polls."""
    return S30Config(
        email="user@example.com",
        password="hunter2",
        poll_interval=0.01,
        fast_poll_interval=0,
    )


def create_mock_response(
    status: int = 200,
    json_data: Any = None,
    text_data: str | None = None,
) -> AsyncMock:
    """Create a configured mock response.

    Args:
        status: HTTP status code
        json_data: Body to serialize as the text() result
        text_data: Raw text() result, used when json_data is None

    Returns:
        Configured AsyncMock response
    """
    response = AsyncMock()
    response.status = status

    if json_data is not None:
        response.text.return_value = json.dumps(json_data)
    else:
        response.text.return_value = text_data or ""

    response.__aenter__.return_value = response
    response.__aexit__.return_value = None

    return response


def auth_body(token: str = "cert-token") -> dict[str, Any]:
    return {"serverAssigned": {"security": {"certificateToken": {"encoded": token}}}}


def login_body(
    systems: list[tuple[str, str]] | None = None,
    *,
    token: str = "bearer-token",
    expires_at: float | None = None,
    presence: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build a login response listing ``systems`` as (sys_id, home_name)."""
    if systems is None:
        systems = [("sys-0001", "Beach House")]
    if expires_at is None:
        expires_at = time.time() + 3600

    homes: dict[str, list[dict[str, Any]]] = defaultdict(list)
    for sys_id, home_name in systems:
        homes[home_name].append({"id": len(homes[home_name]), "sysId": sys_id})

    body: dict[str, Any] = {
        "readyHomes": {
            "homes": [
                {"id": i, "homeId": str(i), "name": name, "systems": home_systems}
                for i, (name, home_systems) in enumerate(homes.items())
            ]
        },
        "ServerAssignedRoot": {
            "serverAssigned": {
                "security": {
                    "userToken": {
                        "type": "Bearer",
                        "encoded": token,
                        "expiryTime": expires_at,
                    }
                }
            }
        },
    }
    if presence is not None:
        body["myPresence"] = presence
    return body


def zone_message(
    sender: str, zones: list[dict[str, Any]], system: dict[str, Any] | None = None
) -> dict[str, Any]:
    data: dict[str, Any] = {"zones": zones}
    if system is not None:
        data["system"] = system
    return {"MessageType": "PropertyChange", "SenderID": sender, "Data": data}


class FakeCloud:
    """Routes mocked ``ClientSession.request`` calls by URL.

    Queued responses are returned first, then the URL's default response.
    Unknown URLs answer 404.
    """

    def __init__(self) -> None:
        self.queued: dict[str, list[AsyncMock]] = defaultdict(list)
        self.defaults: dict[str, AsyncMock] = {}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def queue(self, url: str, *responses: AsyncMock) -> None:
        self.queued[url].extend(responses)

    def default(self, url: str, response: AsyncMock) -> None:
        self.defaults[url] = response

    def calls_to(self, url: str) -> list[dict[str, Any]]:
        return [kwargs for _, called, kwargs in self.calls if called == url]

    def __call__(self, method: str, url: str, **kwargs: Any) -> AsyncMock:
        self.calls.append((method, url, kwargs))
        if self.queued[url]:
            return self.queued[url].pop(0)
        if url in self.defaults:
            return self.defaults[url]
        return create_mock_response(status=404, text_data="not found")


@pytest.fixture
def cloud(mock_session: MagicMock) -> FakeCloud:
    """A fake cloud answering auth, login, request-data and publish with 200."""
    fake = FakeCloud()
    fake.default(CLOUD_AUTHENTICATE_URL, create_mock_response(json_data=auth_body()))
    fake.default(CLOUD_LOGIN_URL, create_mock_response(json_data=login_body()))
    fake.default(CLOUD_REQUESTDATA_URL, create_mock_response(text_data="1"))
    fake.default(CLOUD_PUBLISH_URL, create_mock_response(text_data="1"))
    fake.default(CLOUD_RETRIEVE_URL, create_mock_response(status=204))
    mock_session.request.side_effect = fake
    return fake
