"""Capability contract shared by the Lennox client families."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ThermostatClient(Protocol):
    """What an integration layer needs from a thermostat cloud client.

    Zone objects are implementation specific; callers pass back the zone
    objects they received from ``get_zones`` or ``on_update``.
    """

    async def server_connect(self) -> None: ...

    async def initialize(self, timeout: float | None = None) -> None: ...

    def get_zones(self) -> Sequence[Any]: ...

    def on_update(self, callback: Callable[[Any], None]) -> Callable[[], None]: ...

    async def start_message_pump(
        self, on_error: Callable[[Exception], Awaitable[None] | None] | None = None
    ) -> None: ...

    async def set_hvac_mode(self, zone: Any, mode: str) -> None: ...

    async def set_temperature(
        self, zone: Any, *, hsp: float | None = None, csp: float | None = None
    ) -> None: ...

    async def shutdown(self) -> None: ...
