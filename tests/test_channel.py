"""Test subscription, publish and retrieve calls."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from lennox_s30 import S30AuthSession, S30Channel, S30HttpClient
from lennox_s30.const import (
    CLOUD_PUBLISH_URL,
    CLOUD_REQUESTDATA_URL,
    CLOUD_RETRIEVE_URL,
    HOME_DATA_PATH,
    SYSTEM_DATA_PATH,
)
from lennox_s30.errors import S30CommsError, S30ResponseError, S30Unauthorized

from .conftest import FakeCloud, create_mock_response, zone_message


def make_channel(mock_session: MagicMock) -> tuple[S30Channel, S30AuthSession]:
    http = S30HttpClient(mock_session)
    auth = S30AuthSession(
        http, email="user@example.com", password="hunter2", app_id="app123"
    )
    return S30Channel(http, auth), auth


@pytest.fixture
async def logged_in(mock_session: MagicMock, cloud: FakeCloud) -> S30Channel:
    channel, auth = make_channel(mock_session)
    await auth.force_refresh()
    cloud.calls.clear()
    return channel


class TestSubscribe:
    """Test the two request-data calls of a subscription."""

    async def test_subscribe_requests_both_paths(
        self, logged_in: S30Channel, cloud: FakeCloud
    ) -> None:
        await logged_in.subscribe("sys-1")

        calls = cloud.calls_to(CLOUD_REQUESTDATA_URL)
        assert len(calls) == 2
        bodies = [json.loads(call["data"]) for call in calls]
        assert [b["AdditionalParameters"]["JSONPath"] for b in bodies] == [
            SYSTEM_DATA_PATH,
            HOME_DATA_PATH,
        ]
        for body in bodies:
            assert body["MessageType"] == "RequestData"
            assert body["TargetID"] == "sys-1"
            assert body["SenderID"] == "app123_user@example.com"
        assert bodies[0]["MessageID"] != bodies[1]["MessageID"]

    async def test_request_headers(
        self, logged_in: S30Channel, cloud: FakeCloud
    ) -> None:
        await logged_in.request_data("sys-1", HOME_DATA_PATH)

        headers = cloud.calls_to(CLOUD_REQUESTDATA_URL)[0]["headers"]
        assert headers["Authorization"] == "bearer-token"
        assert headers["Content-Type"] == "application/json; charset=utf-8"

    async def test_not_logged_in(
        self, mock_session: MagicMock, cloud: FakeCloud
    ) -> None:
        """Test no request is sent without a bearer token."""
        channel, _ = make_channel(mock_session)

        with pytest.raises(S30Unauthorized, match="Not logged in"):
            await channel.subscribe("sys-1")

        assert cloud.calls == []

    async def test_unauthorized(self, logged_in: S30Channel, cloud: FakeCloud) -> None:
        cloud.queue(CLOUD_REQUESTDATA_URL, create_mock_response(status=401))

        with pytest.raises(S30Unauthorized) as exc_info:
            await logged_in.subscribe("sys-1")

        assert exc_info.value.status == 401
        assert len(cloud.calls_to(CLOUD_REQUESTDATA_URL)) == 1

    async def test_server_error(self, logged_in: S30Channel, cloud: FakeCloud) -> None:
        cloud.queue(
            CLOUD_REQUESTDATA_URL,
            create_mock_response(status=200),
            create_mock_response(status=500, text_data="oops"),
        )

        with pytest.raises(S30ResponseError) as exc_info:
            await logged_in.subscribe("sys-1")

        assert exc_info.value.status == 500
        assert "RequestData failed - status [500] response [oops]" in str(exc_info.value)


class TestPublish:
    """Test command publishing."""

    async def test_publish_body(self, logged_in: S30Channel, cloud: FakeCloud) -> None:
        await logged_in.publish("sys-1", {"schedules": []})

        call = cloud.calls_to(CLOUD_PUBLISH_URL)[0]
        body = json.loads(call["data"])
        assert body["MessageType"] == "Command"
        assert body["TargetID"] == "sys-1"
        assert body["Data"] == {"schedules": []}
        assert body["MessageID"]
        assert call["headers"]["Authorization"] == "bearer-token"

    async def test_publish_rejected(
        self, logged_in: S30Channel, cloud: FakeCloud
    ) -> None:
        cloud.queue(CLOUD_PUBLISH_URL, create_mock_response(status=400, text_data="no"))

        with pytest.raises(S30CommsError, match=r"Publish failed - status \[400\]"):
            await logged_in.publish("sys-1", {})


class TestRetrieve:
    """Test message retrieval."""

    async def test_retrieve_params(self, logged_in: S30Channel, cloud: FakeCloud) -> None:
        await logged_in.retrieve(25)

        method, url, kwargs = cloud.calls[0]
        assert (method, url) == ("GET", CLOUD_RETRIEVE_URL)
        assert kwargs["params"] == {
            "Direction": "Oldest-to-Newest",
            "MessageCount": "25",
            "StartTime": "1",
            "LongPollingTimeout": "0",
        }
        assert kwargs["headers"]["Authorization"] == "bearer-token"

    async def test_no_content(self, logged_in: S30Channel) -> None:
        assert await logged_in.retrieve() == []

    async def test_messages_returned(
        self, logged_in: S30Channel, cloud: FakeCloud
    ) -> None:
        message = zone_message("sys-1", [{"id": 0, "status": {"temperature": 70}}])
        cloud.queue(
            CLOUD_RETRIEVE_URL, create_mock_response(json_data={"messages": [message]})
        )

        assert await logged_in.retrieve() == [message]

    async def test_retrieve_unauthorized(
        self, logged_in: S30Channel, cloud: FakeCloud
    ) -> None:
        cloud.queue(CLOUD_RETRIEVE_URL, create_mock_response(status=401))

        with pytest.raises(S30Unauthorized):
            await logged_in.retrieve()

    async def test_retrieve_server_error(
        self, logged_in: S30Channel, cloud: FakeCloud
    ) -> None:
        cloud.queue(CLOUD_RETRIEVE_URL, create_mock_response(status=502))

        with pytest.raises(S30ResponseError):
            await logged_in.retrieve()
