"""Two-step authentication against the Lennox S30 cloud.

The cloud first exchanges a fixed client certificate for a certificate token,
then accepts the account credentials under that token and answers with a
bearer token, its absolute expiry and the list of homes and systems.
There is no refresh-token exchange: refreshing redoes both steps.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from .const import (
    CERTIFICATE,
    CLOUD_AUTHENTICATE_URL,
    CLOUD_LOGIN_URL,
    DEFAULT_AUTH_RETRIES,
    DEFAULT_CLOUD_APP_ID,
    DEFAULT_TOKEN_REFRESH_BUFFER,
)
from .errors import S30AuthFailed, S30CommsError, S30LoginFailed
from .http import S30HttpClient

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscoveredSystem:
    """A system listed in the login response."""

    sys_id: str
    home_name: str
    cloud_status: str = "unknown"


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful credential login."""

    bearer_token: str
    expires_at: float
    systems: list[DiscoveredSystem] = field(default_factory=list)


class S30AuthSession:
    """Holds the certificate and bearer tokens for one account.

    Usage:
        auth = S30AuthSession(http, email="me@example.com", password="secret")
        result = await auth.force_refresh()
        headers = {"Authorization": auth.bearer_token}
    """

    def __init__(
        self,
        http: S30HttpClient,
        *,
        email: str,
        password: str,
        app_id: str = DEFAULT_CLOUD_APP_ID,
        refresh_buffer: float = DEFAULT_TOKEN_REFRESH_BUFFER,
        max_retries: int = DEFAULT_AUTH_RETRIES,
    ) -> None:
        self._http = http
        self._email = email
        self._password = password
        self._app_id = app_id
        self._refresh_buffer = refresh_buffer
        self._max_retries = max_retries

        self._certificate_token: str | None = None
        self._bearer_token: str | None = None
        self._expires_at: float = 0.0

    @property
    def email(self) -> str:
        return self._email

    @property
    def app_id(self) -> str:
        return self._app_id

    @property
    def certificate_token(self) -> str | None:
        return self._certificate_token

    @property
    def bearer_token(self) -> str | None:
        return self._bearer_token

    @property
    def expires_at(self) -> float:
        """Absolute bearer token expiry, epoch seconds."""
        return self._expires_at

    @property
    def is_authenticated(self) -> bool:
        return self._bearer_token is not None

    async def authenticate(self) -> str:
        """Exchange the client certificate for a certificate token.

        Non-200 responses and transport errors are retried up to
        ``max_retries`` attempts in total.

        Raises:
            S30AuthFailed: When every attempt failed (carries the last failure
                text) or a 200 response lacks the token.
        """
        _LOGGER.info("Authenticating with Lennox cloud")
        last_error = "Authenticate failed"

        for attempt in range(self._max_retries):
            try:
                resp = await self._http.post(
                    CLOUD_AUTHENTICATE_URL,
                    headers={"Content-Type": "text/plain"},
                    data=CERTIFICATE,
                )
            except S30CommsError as err:
                last_error = (
                    f"Authenticate error - attempt [{attempt + 1}] of "
                    f"[{self._max_retries}]: {err}"
                )
                _LOGGER.warning(last_error)
                continue

            if resp.status == 200:
                token = _dig(
                    resp.json_dict(),
                    "serverAssigned",
                    "security",
                    "certificateToken",
                    "encoded",
                )
                if not token:
                    raise S30AuthFailed(
                        "No certificate token in authenticate response",
                        status=resp.status,
                    )
                self._certificate_token = token
                _LOGGER.debug("Certificate authentication successful")
                return token

            last_error = (
                f"Authenticate failed - attempt [{attempt + 1}] of "
                f"[{self._max_retries}] status [{resp.status}] text [{resp.text}]"
            )
            _LOGGER.warning(last_error)

        raise S30AuthFailed(last_error)

    async def login(
        self, email: str | None = None, password: str | None = None
    ) -> LoginResult:
        """Log in with account credentials under the certificate token.

        Raises:
            S30LoginFailed: No certificate token held, non-200 response, or no
                user token in the response body.
            S30CommsError: Transport failure.
        """
        if email is not None:
            self._email = email
        if password is not None:
            self._password = password

        if not self._certificate_token:
            raise S30LoginFailed("No certificate token - authenticate first")

        _LOGGER.info("Logging in as %s", self._email)
        body = urlencode(
            {
                "username": self._email,
                "password": self._password,
                "grant_type": "password",
                "applicationid": self._app_id,
            }
        )

        resp = await self._http.post(
            CLOUD_LOGIN_URL,
            headers={
                "Authorization": self._certificate_token,
                "Content-Type": "text/plain",
            },
            data=body,
        )

        if resp.status != 200:
            raise S30LoginFailed(
                f"Login failed - status [{resp.status}] response [{resp.text}]",
                status=resp.status,
            )

        result = parse_login_response(resp.json_dict())
        self._bearer_token = result.bearer_token
        self._expires_at = result.expires_at
        _LOGGER.info(
            "Login successful, %d system(s), token expires at %s",
            len(result.systems),
            time.strftime("%Y-%m-%d %H:%M:%S", time.gmtime(result.expires_at)),
        )
        return result

    def needs_refresh(self, now: float | None = None) -> bool:
        """Return True once within the safety buffer of the token expiry."""
        if now is None:
            now = time.time()
        return now >= self._expires_at - self._refresh_buffer

    async def force_refresh(self) -> LoginResult:
        """Redo the full certificate exchange and login."""
        _LOGGER.debug("Refreshing authentication")
        await self.authenticate()
        return await self.login()

    def clear(self) -> None:
        """Forget every token."""
        self._certificate_token = None
        self._bearer_token = None
        self._expires_at = 0.0


def parse_login_response(data: dict[str, Any]) -> LoginResult:
    """Extract the bearer token, expiry and systems from a login response.

    Raises:
        S30LoginFailed: When the user token is missing.
    """
    user_token = _dig(data, "ServerAssignedRoot", "serverAssigned", "security", "userToken")
    if not isinstance(user_token, dict) or not user_token.get("encoded"):
        _LOGGER.error("Login response missing userToken, keys: %s", sorted(data))
        raise S30LoginFailed("No user token in login response")

    try:
        expires_at = float(user_token.get("expiryTime") or 0)
    except (TypeError, ValueError) as err:
        raise S30LoginFailed("Malformed token expiry in login response") from err

    presence = data.get("myPresence")
    if not isinstance(presence, dict):
        presence = None

    homes = _dig(data, "readyHomes", "homes") or []
    if not isinstance(homes, list):
        raise S30LoginFailed("Malformed home list in login response")

    systems: list[DiscoveredSystem] = []
    for home in homes:
        if not isinstance(home, dict):
            _LOGGER.debug("Skipping malformed home entry: %s", home)
            continue
        home_name = home.get("name") or "Lennox System"
        home_systems = home.get("systems") or []
        if not isinstance(home_systems, list):
            raise S30LoginFailed(f"Malformed system list for home {home_name}")
        for home_system in home_systems:
            if not isinstance(home_system, dict):
                continue
            sys_id = home_system.get("sysId")
            if not sys_id:
                continue
            status = presence.get(sys_id, "unknown") if presence else "online"
            systems.append(DiscoveredSystem(sys_id, home_name, status))

    return LoginResult(
        bearer_token=user_token["encoded"],
        expires_at=expires_at,
        systems=systems,
    )


def _dig(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data
