"""Client configuration and its YAML loader."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .const import (
    DEFAULT_AUTH_RETRIES,
    DEFAULT_CLOUD_APP_ID,
    DEFAULT_FAST_POLL_INTERVAL,
    DEFAULT_INITIALIZE_TIMEOUT,
    DEFAULT_MAX_CONSECUTIVE_ERRORS,
    DEFAULT_MESSAGE_COUNT,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TOKEN_REFRESH_BUFFER,
    MANUAL_MODE_SCHEDULE_BASE,
)


class ConfigLoadError(Exception):
    """Raised when a configuration file cannot be loaded."""


@dataclass
class S30Config:
    """Settings for one account connection.

    Attributes:
        email: Account email.
        password: Account password.
        app_id: Application id sent at login and in the sender id.
        poll_interval: Seconds between message pump cycles.
        fast_poll_interval: Seconds between polls while initializing.
        request_timeout: Total timeout of every HTTP call (seconds).
        token_refresh_buffer: Refresh this many seconds before token expiry.
        max_consecutive_errors: Failed pump cycles that trigger a reconnect.
        message_count: Messages fetched per retrieve call.
        initialize_timeout: Upper bound of the initialization wait (seconds).
        manual_schedule_base: Schedule id of zone 0's manual-mode schedule.
        auth_retries: Certificate exchange attempts before giving up.
    """

    email: str
    password: str
    app_id: str = DEFAULT_CLOUD_APP_ID
    poll_interval: float = DEFAULT_POLL_INTERVAL
    fast_poll_interval: float = DEFAULT_FAST_POLL_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    token_refresh_buffer: float = DEFAULT_TOKEN_REFRESH_BUFFER
    max_consecutive_errors: int = DEFAULT_MAX_CONSECUTIVE_ERRORS
    message_count: int = DEFAULT_MESSAGE_COUNT
    initialize_timeout: float = DEFAULT_INITIALIZE_TIMEOUT
    manual_schedule_base: int = MANUAL_MODE_SCHEDULE_BASE
    auth_retries: int = DEFAULT_AUTH_RETRIES

    def __repr__(self) -> str:
        return f"S30Config(email={self.email!r}, password='***', app_id={self.app_id!r})"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> S30Config:
        """Build a config from a mapping, ignoring unknown keys.

        Raises:
            ConfigLoadError: When email or password is missing.
        """
        if not data.get("email") or not data.get("password"):
            raise ConfigLoadError("Both email and password are required")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigLoadError(f"File not found: {path}")
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Expected a mapping in {path}")
    return data


def load_config(path: Path | str) -> S30Config:
    """Load an ``S30Config`` from a YAML file.

    The file may hold the settings at the top level or under an ``s30`` key.
    """
    data = _load_yaml(Path(path))
    section = data.get("s30", data)
    if not isinstance(section, dict):
        raise ConfigLoadError(f"Expected a mapping under 's30' in {path}")
    return S30Config.from_dict(section)
