"""Account-level client for Lennox S30/S40/E30/M30 thermostats.

This module provides the API consumed by integration layers. It handles:
- Connection and two-step authentication
- System discovery and per-system subscriptions
- Routing of retrieved messages into the zone model
- The background message pump
- Mode, setpoint and fan commands
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from .auth import LoginResult, S30AuthSession
from .channel import S30Channel
from .config import S30Config
from .errors import S30ClientError, S30Unauthorized
from .http import S30HttpClient
from .models import (
    MessageFragment,
    S30System,
    S30Zone,
    ZoneObservers,
    ZoneUpdateCallback,
    apply_message,
    iter_active_zones,
)
from .protocol import (
    build_fan_mode_data,
    build_hvac_mode_data,
    build_setpoint_data,
    manual_mode_schedule_id,
)
from .pump import ErrorCallback, MessagePump, PumpState

_LOGGER = logging.getLogger(__name__)


class S30Client:
    """Cloud client for one Lennox account.

    Usage:
        client = S30Client(S30Config(email="me@example.com", password="secret"))
        await client.server_connect()
        await client.initialize()
        client.on_update(my_zone_handler)
        await client.start_message_pump(on_error=my_error_handler)
        await client.set_temperature(client.get_zones()[0], hsp=68)
        await client.shutdown()
    """

    def __init__(
        self,
        config: S30Config,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Account credentials and tuning.
            session: Optional shared aiohttp session. When omitted the client
                creates its own and closes it on shutdown.
        """
        self._config = config
        self._http = S30HttpClient(session, timeout=config.request_timeout)
        self._auth = S30AuthSession(
            self._http,
            email=config.email,
            password=config.password,
            app_id=config.app_id,
            refresh_buffer=config.token_refresh_buffer,
            max_retries=config.auth_retries,
        )
        self._channel = S30Channel(self._http, self._auth)

        self.systems: dict[str, S30System] = {}
        self._subscribed: set[str] = set()
        self._observers = ZoneObservers()
        self._pump: MessagePump | None = None

    @property
    def auth(self) -> S30AuthSession:
        return self._auth

    @property
    def channel(self) -> S30Channel:
        return self._channel

    @property
    def system_list(self) -> list[S30System]:
        return list(self.systems.values())

    @property
    def pump_state(self) -> PumpState:
        return self._pump.state if self._pump else PumpState.DISCONNECTED

    def get_system(self, sys_id: str) -> S30System | None:
        return self.systems.get(sys_id)

    def get_zones(self) -> list[S30Zone]:
        """Snapshot of every active zone across all systems."""
        return iter_active_zones(self.systems.values())

    def on_update(self, callback: ZoneUpdateCallback) -> Callable[[], None]:
        """Register a callback invoked with each updated active zone.

        Returns:
            A function removing the callback.
        """
        return self._observers.add(callback)

    # -------------------------------------------------------------------------
    # Connection
    # -------------------------------------------------------------------------

    async def server_connect(self) -> None:
        """Authenticate, log in and register the discovered systems.

        Raises:
            S30AuthFailed: Certificate exchange failed.
            S30LoginFailed: Credentials rejected or malformed response.
            S30CommsError: Transport failure during login.
        """
        result = await self._auth.force_refresh()
        self._register_systems(result)
        _LOGGER.info("Connected to Lennox cloud, %d system(s)", len(self.systems))

    def _register_systems(self, result: LoginResult) -> None:
        for discovered in result.systems:
            system = self.systems.get(discovered.sys_id)
            if system is not None:
                system.cloud_status = discovered.cloud_status
                continue
            self.systems[discovered.sys_id] = S30System(
                sys_id=discovered.sys_id,
                name=discovered.home_name,
                cloud_status=discovered.cloud_status,
            )
            _LOGGER.info(
                "[%s] Discovered system in home %s (cloud status %s)",
                discovered.sys_id,
                discovered.home_name,
                discovered.cloud_status,
            )

    async def subscribe(self, system: S30System) -> None:
        """Request the full data set of ``system``."""
        await self._channel.subscribe(system.sys_id)
        self._subscribed.add(system.sys_id)

    async def subscribe_all(self) -> None:
        for system in list(self.systems.values()):
            await self.subscribe(system)

    async def initialize(self, timeout: float | None = None) -> None:
        """Subscribe every system and wait until each has an active zone.

        Gives up with a warning once ``timeout`` seconds have passed; a
        timeout is not an error.

        Raises:
            S30Unauthorized: Not logged in, or the token was rejected.
            S30CommsError: A subscription failed.
        """
        if timeout is None:
            timeout = self._config.initialize_timeout

        await self.subscribe_all()

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not self._all_systems_ready():
            if loop.time() >= deadline:
                _LOGGER.warning("Timeout waiting for zone configuration")
                return
            try:
                await self.poll_once()
            except S30Unauthorized:
                raise
            except S30ClientError as err:
                _LOGGER.warning("Poll failed during initialization: %s", err)
            if self._all_systems_ready():
                break
            await asyncio.sleep(self._config.fast_poll_interval)

        _LOGGER.info("All systems initialized with zone data")

    def _all_systems_ready(self) -> bool:
        return all(system.active_zones() for system in self.systems.values())

    # -------------------------------------------------------------------------
    # Message routing
    # -------------------------------------------------------------------------

    async def poll_once(self) -> int:
        """Retrieve one batch of messages and route it.

        Returns:
            The number of messages retrieved.
        """
        messages = await self._channel.retrieve(self._config.message_count)
        if messages:
            _LOGGER.debug("Received %d message(s)", len(messages))
        for message in messages:
            self.route_message(message)
        return len(messages)

    def route_message(self, message: dict[str, Any]) -> list[S30Zone]:
        """Apply one retrieved message to the system that sent it.

        Returns:
            The active zones the message updated.
        """
        fragment = MessageFragment.from_message(message)
        if fragment.sender_id is None:
            _LOGGER.debug("Message without sender: %s", str(message)[:200])
            return []

        system = self.systems.get(fragment.sender_id)
        if system is None:
            _LOGGER.debug("Message for unknown system: %s", fragment.sender_id)
            return []

        if fragment.is_empty:
            _LOGGER.debug("[%s] Message without data", system.sys_id)
            return []

        return apply_message(system, fragment, self._observers)

    # -------------------------------------------------------------------------
    # Message pump
    # -------------------------------------------------------------------------

    async def start_message_pump(self, on_error: ErrorCallback | None = None) -> None:
        """Start the background pump and return immediately."""
        if self._pump is not None and self._pump.is_running:
            _LOGGER.warning("Message pump already running")
            return

        _LOGGER.info("Starting message pump")
        self._pump = MessagePump(
            establish=self._establish,
            refresh=self._refresh,
            reconnect=self._reconnect,
            poll=self.poll_once,
            needs_refresh=self._auth.needs_refresh,
            poll_interval=self._config.poll_interval,
            max_consecutive_errors=self._config.max_consecutive_errors,
            on_error=on_error,
        )
        self._pump.start()

    async def _establish(self) -> None:
        if not self._auth.is_authenticated:
            await self.server_connect()
        for system in list(self.systems.values()):
            if system.sys_id not in self._subscribed:
                await self.subscribe(system)

    async def _refresh(self) -> None:
        result = await self._auth.force_refresh()
        self._register_systems(result)

    async def _reconnect(self) -> None:
        await self._refresh()
        await self.subscribe_all()

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def _schedule_id(self, zone: S30Zone) -> int:
        return manual_mode_schedule_id(zone.index, self._config.manual_schedule_base)

    async def set_hvac_mode(self, zone: S30Zone, mode: str) -> None:
        """Set the HVAC mode through the zone's manual-mode schedule.

        Raises:
            S30BadParameters: Unknown mode.
        """
        data = build_hvac_mode_data(self._schedule_id(zone), mode)
        _LOGGER.info("[%s] Setting HVAC mode of %s to %s", zone.system_id, zone.name, mode)
        await self._channel.publish(zone.system_id, data)

    async def set_temperature(
        self,
        zone: S30Zone,
        *,
        hsp: float | None = None,
        csp: float | None = None,
    ) -> None:
        """Set heating and/or cooling setpoints, given in Fahrenheit.

        Raises:
            S30BadParameters: No setpoint given, or not a number.
        """
        data = build_setpoint_data(self._schedule_id(zone), hsp=hsp, csp=csp)
        _LOGGER.info(
            "[%s] Setting setpoints of %s: hsp=%s csp=%s",
            zone.system_id,
            zone.name,
            hsp,
            csp,
        )
        await self._channel.publish(zone.system_id, data)

    async def set_fan_mode(self, zone: S30Zone, mode: str) -> None:
        """Set the fan mode through the zone's manual-mode schedule.

        Raises:
            S30BadParameters: Unknown mode.
        """
        data = build_fan_mode_data(self._schedule_id(zone), mode)
        _LOGGER.info("[%s] Setting fan mode of %s to %s", zone.system_id, zone.name, mode)
        await self._channel.publish(zone.system_id, data)

    # -------------------------------------------------------------------------
    # Shutdown
    # -------------------------------------------------------------------------

    async def shutdown(self) -> None:
        """Stop the pump and drop all auth and system state.

        Update callbacks registered with ``on_update`` are removed as well;
        register them again after reconnecting the same client. Safe to await
        from an ``on_error`` callback running inside the pump.
        """
        _LOGGER.info("Shutting down Lennox S30 client")
        pump, self._pump = self._pump, None
        try:
            if pump is not None:
                await pump.stop()
        finally:
            self._auth.clear()
            self.systems.clear()
            self._subscribed.clear()
            self._observers.clear()
            await self._http.close()
