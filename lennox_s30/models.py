"""In-memory model of an account's systems and zones.

Updates arrive as sparse fragments: every fragment field is either present
(a value) or absent (``None``). Applying a fragment overwrites exactly the
present fields and leaves the rest of the zone or system untouched. Nothing
here performs I/O or converts between temperature scales.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

from .const import BAD_STATUSES

_LOGGER = logging.getLogger(__name__)

_F = TypeVar("_F", bound="_Fragment")


def _wire(key: str) -> Any:
    """Declare an optional fragment field read from wire key ``key``."""
    return field(default=None, metadata={"wire": key})


@dataclass(frozen=True)
class _Fragment:
    """Base for flat fragments whose fields map one-to-one to wire keys."""

    @classmethod
    def from_dict(cls: type[_F], data: Any) -> _F | None:
        """Build a fragment from a wire mapping, or None when not a mapping."""
        if not isinstance(data, dict):
            return None
        values = {
            f.name: data.get(f.metadata["wire"])
            for f in fields(cls)
            if "wire" in f.metadata
        }
        return cls(**values)

    def present(self) -> dict[str, Any]:
        """Return the present fields, keyed by attribute name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if "wire" in f.metadata and getattr(self, f.name) is not None
        }


def _overlay(target: Any, fragment: _Fragment | None) -> None:
    if fragment is None:
        return
    for name, value in fragment.present().items():
        setattr(target, name, value)


# -----------------------------------------------------------------------------
# Fragments
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class SystemConfigFragment(_Fragment):
    name: str | None = _wire("name")
    temperature_unit: str | None = _wire("temperatureUnit")
    product_type: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> SystemConfigFragment | None:
        fragment = super().from_dict(data)
        if fragment is None:
            return None
        options = data.get("options")
        product_type = options.get("productType") if isinstance(options, dict) else None
        return cls(
            name=fragment.name,
            temperature_unit=fragment.temperature_unit,
            product_type=product_type or None,
        )

    def present(self) -> dict[str, Any]:
        values = super().present()
        if self.product_type is not None:
            values["product_type"] = self.product_type
        return values


@dataclass(frozen=True)
class SystemStatusFragment(_Fragment):
    outdoor_temperature: float | None = _wire("outdoorTemperature")
    outdoor_temperature_c: float | None = _wire("outdoorTemperatureC")
    outdoor_temperature_status: str | None = _wire("outdoorTemperatureStatus")
    zoning_mode: str | None = _wire("zoningMode")
    single_setpoint_mode: bool | None = _wire("singleSetpointMode")
    number_of_zones: int | None = _wire("numberOfZones")


@dataclass(frozen=True)
class SystemTimeFragment(_Fragment):
    current_time: str | None = _wire("currentTime")
    sys_up_time: int | None = _wire("sysUpTime")


@dataclass(frozen=True)
class SystemFragment:
    """System-level part of one message."""

    config: SystemConfigFragment | None = None
    status: SystemStatusFragment | None = None
    time: SystemTimeFragment | None = None

    @classmethod
    def from_dict(cls, data: Any) -> SystemFragment | None:
        if not isinstance(data, dict):
            return None
        return cls(
            config=SystemConfigFragment.from_dict(data.get("config")),
            status=SystemStatusFragment.from_dict(data.get("status")),
            time=SystemTimeFragment.from_dict(data.get("time")),
        )


@dataclass(frozen=True)
class ZoneConfigFragment(_Fragment):
    name: str | None = _wire("name")
    min_csp: float | None = _wire("minCsp")
    min_csp_c: float | None = _wire("minCspC")
    max_csp: float | None = _wire("maxCsp")
    max_csp_c: float | None = _wire("maxCspC")
    min_hsp: float | None = _wire("minHsp")
    min_hsp_c: float | None = _wire("minHspC")
    max_hsp: float | None = _wire("maxHsp")
    max_hsp_c: float | None = _wire("maxHspC")
    heating_option: bool | None = _wire("heatingOption")
    cooling_option: bool | None = _wire("coolingOption")
    emergency_heating_option: bool | None = _wire("emergencyHeatingOption")
    humidification_option: bool | None = _wire("humidificationOption")
    dehumidification_option: bool | None = _wire("dehumidificationOption")
    zone_enabled: bool | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ZoneConfigFragment | None:
        fragment = super().from_dict(data)
        if fragment is None:
            return None
        # zoneEnabled arrives as 0/1
        enabled = data.get("zoneEnabled")
        values = fragment.present()
        if enabled is not None:
            values["zone_enabled"] = enabled == 1
        return cls(**values)

    def present(self) -> dict[str, Any]:
        values = super().present()
        if self.zone_enabled is not None:
            values["zone_enabled"] = self.zone_enabled
        return values


@dataclass(frozen=True)
class PeriodFragment(_Fragment):
    system_mode: str | None = _wire("systemMode")
    fan_mode: str | None = _wire("fanMode")
    humidity_mode: str | None = _wire("humidityMode")
    hsp: float | None = _wire("hsp")
    hsp_c: float | None = _wire("hspC")
    csp: float | None = _wire("csp")
    csp_c: float | None = _wire("cspC")
    sp: float | None = _wire("sp")
    sp_c: float | None = _wire("spC")
    husp: float | None = _wire("husp")
    desp: float | None = _wire("desp")


@dataclass(frozen=True)
class ZoneStatusFragment(_Fragment):
    temperature: float | None = _wire("temperature")
    temperature_c: float | None = _wire("temperatureC")
    temperature_status: str | None = _wire("temperatureStatus")
    humidity: float | None = _wire("humidity")
    humidity_status: str | None = _wire("humidityStatus")
    fan: bool | None = _wire("fan")
    defrost: bool | None = _wire("defrost")
    aux: bool | None = _wire("aux")
    damper: int | None = _wire("damper")
    demand: float | None = _wire("demand")
    ventilation: bool | None = _wire("ventilation")
    allergen_defender: bool | None = _wire("allergenDefender")
    heat_coast: bool | None = _wire("heatCoast")
    cool_coast: bool | None = _wire("coolCoast")
    temp_operation: str | None = _wire("tempOperation")
    hum_operation: str | None = _wire("humOperation")
    period: PeriodFragment | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ZoneStatusFragment | None:
        fragment = super().from_dict(data)
        if fragment is None:
            return None
        return cls(**fragment.present(), period=PeriodFragment.from_dict(data.get("period")))


@dataclass(frozen=True)
class ZoneFragment:
    """Zone-level part of one message, addressed by zone index."""

    index: int
    config: ZoneConfigFragment | None = None
    status: ZoneStatusFragment | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ZoneFragment | None:
        if not isinstance(data, dict):
            return None
        index = data.get("id")
        if not isinstance(index, int) or isinstance(index, bool):
            return None
        return cls(
            index=index,
            config=ZoneConfigFragment.from_dict(data.get("config")),
            status=ZoneStatusFragment.from_dict(data.get("status")),
        )


@dataclass(frozen=True)
class MessageFragment:
    """Everything one inbound message carries for a single system."""

    sender_id: str | None
    system: SystemFragment | None = None
    zones: tuple[ZoneFragment, ...] = ()

    @classmethod
    def from_message(cls, message: dict[str, Any]) -> MessageFragment:
        sender_id = message.get("SenderID") or message.get("SenderId")
        data = message.get("Data")
        if not isinstance(data, dict):
            return cls(sender_id=sender_id)

        zones: list[ZoneFragment] = []
        raw_zones = data.get("zones")
        if isinstance(raw_zones, list):
            for raw in raw_zones:
                zone = ZoneFragment.from_dict(raw)
                if zone is None:
                    _LOGGER.debug("Skipping zone entry without an id: %s", raw)
                    continue
                zones.append(zone)

        return cls(
            sender_id=sender_id,
            system=SystemFragment.from_dict(data.get("system")),
            zones=tuple(zones),
        )

    @property
    def is_empty(self) -> bool:
        return self.system is None and not self.zones


# -----------------------------------------------------------------------------
# Runtime model
# -----------------------------------------------------------------------------


@dataclass(eq=False)
class S30Zone:
    """One independently controllable zone of a system."""

    index: int
    system: S30System = field(repr=False)
    name: str = ""

    # Config
    min_csp: float = 60
    min_csp_c: float = 15.5
    max_csp: float = 99
    max_csp_c: float = 37
    min_hsp: float = 40
    min_hsp_c: float = 4.5
    max_hsp: float = 90
    max_hsp_c: float = 32
    heating_option: bool = False
    cooling_option: bool = False
    emergency_heating_option: bool = False
    humidification_option: bool = False
    dehumidification_option: bool = False
    zone_enabled: bool = False

    # Status, temperature None until the first status update
    temperature: float | None = None
    temperature_c: float | None = None
    temperature_status: str = "good"
    humidity: float | None = None
    humidity_status: str = "good"
    fan: bool = False
    defrost: bool = False
    aux: bool = False
    damper: int = 0
    demand: float = 0
    ventilation: bool = False
    allergen_defender: bool = False
    heat_coast: bool = False
    cool_coast: bool = False
    temp_operation: str = "off"
    hum_operation: str = "off"

    # Active period
    system_mode: str = "off"
    fan_mode: str = "auto"
    humidity_mode: str = "off"
    hsp: float = 68
    hsp_c: float = 20
    csp: float = 78
    csp_c: float = 25.5
    sp: float = 73
    sp_c: float = 22.5
    husp: float = 40
    desp: float = 50

    def __post_init__(self) -> None:
        if not self.name:
            self.name = f"Zone {self.index + 1}"

    @property
    def system_id(self) -> str:
        return self.system.sys_id

    @property
    def system_name(self) -> str:
        return self.system.name

    @property
    def product_type(self) -> str:
        return self.system.product_type

    @property
    def number_of_zones(self) -> int:
        return self.system.number_of_zones

    @property
    def unique_id(self) -> str:
        return f"{self.system.sys_id}_zone_{self.index}".replace("-", "")

    @property
    def is_active(self) -> bool:
        """A zone is exposed once it has reported a temperature."""
        return self.temperature is not None

    @property
    def temperature_ok(self) -> bool:
        return self.temperature_status not in BAD_STATUSES

    @property
    def humidity_ok(self) -> bool:
        return self.humidity_status not in BAD_STATUSES

    def apply(self, fragment: ZoneFragment) -> None:
        """Overlay the present fields of ``fragment``."""
        _overlay(self, fragment.config)
        if fragment.status is not None:
            _overlay(self, fragment.status)
            _overlay(self, fragment.status.period)


@dataclass(eq=False)
class S30System:
    """One physical controller and its zones."""

    sys_id: str
    name: str = "Lennox System"
    product_type: str = "S30"
    temperature_unit: str = "F"
    outdoor_temperature: float = 0
    outdoor_temperature_c: float = 0
    outdoor_temperature_status: str = "good"
    zoning_mode: str = "central"
    single_setpoint_mode: bool = False
    number_of_zones: int = 1
    current_time: str | None = None
    sys_up_time: int = 0
    cloud_status: str = "online"
    zones: dict[int, S30Zone] = field(default_factory=dict, repr=False)

    @property
    def unique_id(self) -> str:
        return self.sys_id.replace("-", "")

    def get_or_create_zone(self, index: int) -> S30Zone:
        """Return zone ``index``, creating a placeholder on first reference."""
        zone = self.zones.get(index)
        if zone is None:
            zone = S30Zone(index=index, system=self)
            self.zones[index] = zone
            _LOGGER.debug("[%s] Created zone %d", self.sys_id, index)
        return zone

    def active_zones(self) -> list[S30Zone]:
        return [zone for zone in self.zones.values() if zone.is_active]

    def apply(self, fragment: SystemFragment) -> None:
        """Overlay the present config, status and time fields."""
        _overlay(self, fragment.config)
        _overlay(self, fragment.status)
        _overlay(self, fragment.time)


# -----------------------------------------------------------------------------
# Observers
# -----------------------------------------------------------------------------

ZoneUpdateCallback = Callable[[S30Zone], None]


class ZoneObservers:
    """Callbacks notified about updated active zones.

    Each callback runs in isolation: an exception is logged and the remaining
    callbacks still run.
    """

    def __init__(self) -> None:
        self._callbacks: list[ZoneUpdateCallback] = []

    def __len__(self) -> int:
        return len(self._callbacks)

    def add(self, callback: ZoneUpdateCallback) -> Callable[[], None]:
        """Register ``callback`` and return a function that removes it."""
        self._callbacks.append(callback)

        def remove() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return remove

    def clear(self) -> None:
        self._callbacks.clear()

    def notify(self, zone: S30Zone) -> None:
        for callback in list(self._callbacks):
            try:
                callback(zone)
            except Exception:
                _LOGGER.exception(
                    "[%s] Update callback failed for zone %d",
                    zone.system_id,
                    zone.index,
                )


def apply_zone_fragment(
    zone: S30Zone, fragment: ZoneFragment, observers: ZoneObservers | None = None
) -> bool:
    """Merge ``fragment`` into ``zone`` and notify observers if it is active.

    Returns:
        True when observers were notified.
    """
    zone.apply(fragment)
    if not zone.is_active:
        return False
    if observers is not None:
        observers.notify(zone)
    return True


def apply_message(
    system: S30System,
    message: MessageFragment,
    observers: ZoneObservers | None = None,
) -> list[S30Zone]:
    """Route a message into ``system``: system part first, then each zone.

    Returns:
        The zones that were updated and are active.
    """
    if message.system is not None:
        system.apply(message.system)

    updated: list[S30Zone] = []
    for zone_fragment in message.zones:
        zone = system.get_or_create_zone(zone_fragment.index)
        if apply_zone_fragment(zone, zone_fragment, observers):
            updated.append(zone)
    return updated


def iter_active_zones(systems: Iterable[S30System]) -> list[S30Zone]:
    """Flatten the active zones of ``systems``."""
    return [zone for system in systems for zone in system.active_zones()]
