"""Message pump: the poll, route and reconnect loop of a client.

States:
    disconnected → authenticating   on start
    authenticating → polling        login (if needed) and subscriptions done
    polling → polling               each successful cycle
    polling → reconnecting          unauthorized response, or
                                    ``max_consecutive_errors`` failed cycles
    reconnecting → polling          refresh and re-subscribe succeeded
    reconnecting → reconnecting     refresh or re-subscribe failed again

Errors never stop the loop; only ``stop()`` does.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from .const import DEFAULT_MAX_CONSECUTIVE_ERRORS, DEFAULT_POLL_INTERVAL
from .errors import S30Unauthorized

_LOGGER = logging.getLogger(__name__)

ErrorCallback = Callable[[Exception], Awaitable[None] | None]


class PumpState(Enum):
    """Connection states of the message pump."""

    DISCONNECTED = "disconnected"
    AUTHENTICATING = "authenticating"
    POLLING = "polling"
    RECONNECTING = "reconnecting"


class MessagePump:
    """Drive one client's poll cycles on a fixed cadence.

    Usage:
        pump = MessagePump(
            establish=client.establish,
            refresh=client.refresh,
            reconnect=client.reconnect,
            poll=client.poll_once,
            needs_refresh=auth.needs_refresh,
        )
        pump.start()
        ...
        await pump.stop()
    """

    def __init__(
        self,
        *,
        establish: Callable[[], Awaitable[Any]],
        refresh: Callable[[], Awaitable[Any]],
        reconnect: Callable[[], Awaitable[Any]],
        poll: Callable[[], Awaitable[Any]],
        needs_refresh: Callable[[], bool],
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_consecutive_errors: int = DEFAULT_MAX_CONSECUTIVE_ERRORS,
        on_error: ErrorCallback | None = None,
        on_state_changed: Callable[[PumpState], None] | None = None,
    ) -> None:
        """Initialize the pump.

        Args:
            establish: Log in if needed and subscribe every known system.
            refresh: Redo the authentication handshake.
            reconnect: Refresh and re-subscribe every known system.
            poll: Retrieve one bounded batch of messages and route it.
            needs_refresh: Whether the bearer token is about to expire.
            poll_interval: Sleep between cycles (seconds).
            max_consecutive_errors: Failed cycles that trigger a reconnect.
            on_error: Called with every error the pump absorbs.
            on_state_changed: Called with each new state.
        """
        self._establish = establish
        self._refresh = refresh
        self._reconnect = reconnect
        self._poll = poll
        self._needs_refresh = needs_refresh
        self._poll_interval = poll_interval
        self._max_consecutive_errors = max_consecutive_errors
        self._on_error = on_error
        self._on_state_changed = on_state_changed

        self._state = PumpState.DISCONNECTED
        self._consecutive_errors = 0
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> PumpState:
        return self._state

    @property
    def consecutive_errors(self) -> int:
        return self._consecutive_errors

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> asyncio.Task[None]:
        """Schedule the loop on the running event loop and return at once."""
        if self._task is None or self._task.done():
            self._stop_event.clear()
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        """Ask the loop to stop and wait for it.

        An in-flight request is not interrupted; it completes or times out
        before the loop observes the stop request. Called from inside the
        loop (e.g. an error callback), it only requests the stop.
        """
        self._stop_event.set()
        task = self._task
        if task is None or task is asyncio.current_task():
            return
        try:
            await task
        finally:
            self._task = None

    async def run(self) -> None:
        """Run cycles until ``stop()`` is called."""
        _LOGGER.info("Message pump started")
        try:
            while not self._stop_event.is_set():
                await self.run_cycle()
                if self._stop_event.is_set():
                    break
                try:
                    await asyncio.wait_for(
                        self._stop_event.wait(), timeout=self._poll_interval
                    )
                except TimeoutError:
                    pass
        finally:
            self._set_state(PumpState.DISCONNECTED)
            _LOGGER.info("Message pump stopped")

    # -------------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------------

    async def run_cycle(self) -> None:
        """Run one cycle for the current state."""
        if self._state is PumpState.DISCONNECTED:
            self._set_state(PumpState.AUTHENTICATING)

        if self._state is PumpState.AUTHENTICATING:
            await self._run_establish()
        elif self._state is PumpState.RECONNECTING:
            await self._run_reconnect()
        else:
            await self._run_poll()

    async def _run_establish(self) -> None:
        try:
            await self._establish()
        except Exception as err:
            _LOGGER.warning("Initial connection failed: %s", err)
            self._set_state(PumpState.RECONNECTING)
            await self._report(err)
            return
        self._consecutive_errors = 0
        self._set_state(PumpState.POLLING)

    async def _run_reconnect(self) -> None:
        try:
            await self._reconnect()
        except Exception as err:
            _LOGGER.error("Reconnect failed: %s", err)
            await self._report(err)
            return
        self._consecutive_errors = 0
        self._set_state(PumpState.POLLING)
        _LOGGER.info("Reconnected successfully")

    async def _run_poll(self) -> None:
        try:
            if self._needs_refresh():
                _LOGGER.debug("Token close to expiry, refreshing")
                await self._refresh()
            await self._poll()
        except S30Unauthorized as err:
            _LOGGER.warning("Token rejected, reconnecting: %s", err)
            self._set_state(PumpState.RECONNECTING)
            await self._report(err)
            return
        except Exception as err:
            self._consecutive_errors += 1
            if self._consecutive_errors >= self._max_consecutive_errors:
                _LOGGER.warning(
                    "%d consecutive errors, reconnecting: %s",
                    self._consecutive_errors,
                    err,
                )
                self._set_state(PumpState.RECONNECTING)
            else:
                _LOGGER.debug(
                    "Message pump error (%d/%d): %s",
                    self._consecutive_errors,
                    self._max_consecutive_errors,
                    err,
                )
            await self._report(err)
            return
        self._consecutive_errors = 0

    def _set_state(self, state: PumpState) -> None:
        if self._state is state:
            return
        _LOGGER.debug("Pump state: %s → %s", self._state.value, state.value)
        self._state = state
        if self._on_state_changed:
            try:
                self._on_state_changed(state)
            except Exception:
                _LOGGER.exception("Pump state callback error")

    async def _report(self, err: Exception) -> None:
        if self._on_error is None:
            return
        try:
            result = self._on_error(err)
            if inspect.iscoroutine(result):
                await result
        except Exception:
            _LOGGER.exception("Pump error callback failed")
