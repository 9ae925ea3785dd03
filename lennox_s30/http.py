"""HTTP transport for the Lennox S30 cloud endpoints."""

from __future__ import annotations

import json
import logging
import socket
from dataclasses import dataclass
from typing import Any

import aiohttp

from .const import DEFAULT_REQUEST_TIMEOUT, USER_AGENT
from .errors import S30ConnectionError, S30Timeout

_LOGGER = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "*/*",
    "Accept-Language": "en-US;q=1",
}


@dataclass(frozen=True)
class S30Response:
    """Status, raw body and best-effort parsed JSON of a cloud response."""

    status: int
    text: str
    data: Any = None

    def json_dict(self) -> dict[str, Any]:
        """Return the parsed body when it is a JSON object, else an empty dict."""
        return self.data if isinstance(self.data, dict) else {}


class S30HttpClient:
    """HTTP client wrapper for the Lennox S30 cloud endpoints.

    Every call is bounded by a fixed total timeout. Transport-level failures
    are normalized into ``S30Timeout`` or ``S30ConnectionError``; HTTP status
    codes are returned to the caller untouched.

    When no session is given, one is created on first use and closed by
    ``close()``; an injected session is left to its owner.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._timeout = timeout

    def _client_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        data: str | bytes | None = None,
        params: dict[str, str] | None = None,
    ) -> S30Response:
        """Perform a request and return its status and body."""
        merged = {**_DEFAULT_HEADERS, **(headers or {})}
        _LOGGER.debug("API request: %s %s", method, url)

        try:
            async with self._client_session().request(
                method,
                url,
                headers=merged,
                data=data,
                params=params,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as resp:
                # Error bodies are not always valid in the declared charset
                text = await resp.text(errors="replace")
                status = resp.status
        except TimeoutError as err:
            raise S30Timeout(
                f"Request timeout after {self._timeout:g}s: {method} {url}"
            ) from err
        except aiohttp.ClientSSLError as err:
            raise S30ConnectionError(f"SSL/TLS error: {err}") from err
        except aiohttp.ClientConnectorError as err:
            raise S30ConnectionError(_describe_connector_error(err)) from err
        except aiohttp.ClientError as err:
            raise S30ConnectionError(f"Network error: {err}") from err

        _LOGGER.debug("API response: %s (%d chars)", status, len(text))
        return S30Response(status=status, text=text, data=_parse_body(text))

    async def get(self, url: str, **kwargs: Any) -> S30Response:
        """Perform a GET request."""
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> S30Response:
        """Perform a POST request."""
        return await self.request("POST", url, **kwargs)


def _parse_body(text: str) -> Any:
    # Some endpoints answer with plain text
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


def _describe_connector_error(err: aiohttp.ClientConnectorError) -> str:
    os_error = err.os_error
    if isinstance(os_error, socket.gaierror):
        return "DNS lookup failed - check your network connection"
    if isinstance(os_error, ConnectionRefusedError):
        return "Connection refused"
    if isinstance(os_error, TimeoutError):
        return "Connection timed out"
    return f"Network error: {err}"
