"""Message builders for the Lennox S30 request-data and publish endpoints.

Setpoint, mode and fan changes are never written to a zone directly: the
cloud expects them as a write to period 0 of the zone's manual-mode schedule,
whose id is the schedule base plus the zone index.
"""

from __future__ import annotations

import math
import uuid
from typing import Any

from .const import (
    FAN_MODES,
    HVAC_MODES,
    MANUAL_MODE_SCHEDULE_BASE,
    MESSAGE_TYPE_COMMAND,
    MESSAGE_TYPE_REQUEST_DATA,
)
from .errors import S30BadParameters


def new_message_id() -> str:
    """Return a fresh correlation id."""
    return str(uuid.uuid4())


def sender_id(app_id: str, email: str) -> str:
    """Stable per-install client identifier."""
    return f"{app_id}_{email}"


def build_request_data(
    *,
    sender: str,
    target_id: str,
    json_path: str,
    msg_id: str | None = None,
) -> dict[str, Any]:
    """Build a RequestData body asking ``target_id`` for ``json_path``."""
    return {
        "MessageType": MESSAGE_TYPE_REQUEST_DATA,
        "SenderID": sender,
        "MessageID": msg_id or new_message_id(),
        "TargetID": target_id,
        "AdditionalParameters": {"JSONPath": json_path},
    }


def build_command(
    *,
    sender: str,
    target_id: str,
    data: dict[str, Any],
    msg_id: str | None = None,
) -> dict[str, Any]:
    """Build a Command body publishing ``data`` to ``target_id``."""
    return {
        "MessageType": MESSAGE_TYPE_COMMAND,
        "SenderID": sender,
        "MessageID": msg_id or new_message_id(),
        "TargetID": target_id,
        "Data": data,
    }


def manual_mode_schedule_id(
    zone_index: int, base: int = MANUAL_MODE_SCHEDULE_BASE
) -> int:
    """Schedule id holding the manual-mode settings of a zone."""
    return base + zone_index


def round_half_up(value: float, digits: int = 0) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def fahrenheit_to_celsius(value: float) -> float:
    """Convert to Celsius, rounded half-up to one decimal."""
    return round_half_up((value - 32) * 5 / 9, 1)


def build_schedule_period_write(
    schedule_id: int, period: dict[str, Any]
) -> dict[str, Any]:
    """Wrap ``period`` as a write to period 0 of ``schedule_id``."""
    return {
        "schedules": [
            {
                "id": schedule_id,
                "schedule": {"periods": [{"id": 0, "period": period}]},
            }
        ]
    }


def build_hvac_mode_data(schedule_id: int, mode: str) -> dict[str, Any]:
    if mode not in HVAC_MODES:
        raise S30BadParameters(
            f"Invalid HVAC mode [{mode}], expected one of {sorted(HVAC_MODES)}"
        )
    return build_schedule_period_write(schedule_id, {"systemMode": mode})


def build_fan_mode_data(schedule_id: int, mode: str) -> dict[str, Any]:
    if mode not in FAN_MODES:
        raise S30BadParameters(
            f"Invalid fan mode [{mode}], expected one of {sorted(FAN_MODES)}"
        )
    return build_schedule_period_write(schedule_id, {"fanMode": mode})


def build_setpoint_data(
    schedule_id: int,
    *,
    hsp: float | None = None,
    csp: float | None = None,
) -> dict[str, Any]:
    """Build a setpoint write carrying both Fahrenheit and Celsius values.

    Raises:
        S30BadParameters: Neither setpoint given, or a setpoint is not a number.
    """
    if hsp is None and csp is None:
        raise S30BadParameters("At least one of hsp or csp is required")

    period: dict[str, Any] = {}
    for key, value in (("hsp", hsp), ("csp", csp)):
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise S30BadParameters(f"Setpoint {key} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise S30BadParameters(f"Setpoint {key} must be finite, got {value!r}")
        period[key] = int(round_half_up(value))
        period[f"{key}C"] = fahrenheit_to_celsius(value)

    return build_schedule_period_write(schedule_id, period)


def parse_retrieved_messages(data: Any) -> list[dict[str, Any]]:
    """Return the message list of a retrieve response body."""
    if not isinstance(data, dict):
        return []
    messages = data.get("messages")
    if not isinstance(messages, list):
        return []
    return [message for message in messages if isinstance(message, dict)]
