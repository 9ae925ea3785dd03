"""Async cloud client for Lennox S30/S40/E30/M30 thermostats."""

__version__ = "0.1.0"

from .auth import DiscoveredSystem, LoginResult, S30AuthSession
from .channel import S30Channel
from .client import S30Client
from .config import ConfigLoadError, S30Config, load_config
from .errors import (
    S30AuthFailed,
    S30BadParameters,
    S30ClientError,
    S30CommsError,
    S30ConnectionError,
    S30LoginFailed,
    S30ResponseError,
    S30Timeout,
    S30Unauthorized,
)
from .http import S30HttpClient, S30Response
from .interface import ThermostatClient
from .models import (
    MessageFragment,
    S30System,
    S30Zone,
    ZoneFragment,
    ZoneObservers,
    apply_zone_fragment,
)
from .pump import MessagePump, PumpState

__all__ = [
    "ConfigLoadError",
    "DiscoveredSystem",
    "LoginResult",
    "MessageFragment",
    "MessagePump",
    "PumpState",
    "S30AuthFailed",
    "S30AuthSession",
    "S30BadParameters",
    "S30Channel",
    "S30Client",
    "S30ClientError",
    "S30CommsError",
    "S30Config",
    "S30ConnectionError",
    "S30HttpClient",
    "S30LoginFailed",
    "S30Response",
    "S30System",
    "S30Timeout",
    "S30Unauthorized",
    "S30Zone",
    "ThermostatClient",
    "ZoneFragment",
    "ZoneObservers",
    "__version__",
    "apply_zone_fragment",
    "load_config",
]
