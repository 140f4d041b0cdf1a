"""python-fritzbox exceptions."""

from __future__ import annotations

from asyncio import TimeoutError as _asyncioTimeoutError
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .device import Device


class FritzboxException(Exception):
    """Base exception for library errors."""


class MalformedUrlError(FritzboxException, ValueError):
    """Exception for request paths that cannot be resolved."""


class TransportError(FritzboxException):
    """Exception for failed http exchanges with the gateway."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.status: int | None = kwargs.get("status")
        super().__init__(*args)


class TimeoutError(TransportError, _asyncioTimeoutError):
    """Timeout exception for gateway requests."""

    def __repr__(self) -> str:
        return TransportError.__repr__(self)

    def __str__(self) -> str:
        return TransportError.__str__(self)


class _ConnectionError(TransportError):
    """Connection exception for gateway requests."""


class DecodeError(FritzboxException):
    """Exception for response bodies that cannot be decoded."""


class AuthenticationError(FritzboxException):
    """Exception for rejected credentials."""


class SessionExpiredError(AuthenticationError):
    """Exception for sessions left idle past the inactivity window."""


class InvalidArgumentError(FritzboxException, ValueError):
    """Exception for out of range command arguments."""


class DeviceError(FritzboxException):
    """Base exception for device errors."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.device: Device | None = kwargs.get("device")
        super().__init__(*args)


class DeviceNotConnectedError(DeviceError):
    """The device is not present at the gateway."""


class DeviceLockedError(DeviceError):
    """The device is locked and has to be unlocked via the gateway ui."""


class DeviceNotFoundError(DeviceError):
    """No device with the requested identifier is known to the gateway."""


class UnsupportedOperationError(DeviceError):
    """The command is not applicable to the device kind."""


class DeviceOffError(DeviceError):
    """The thermostat is switched off and has no setpoint."""


class InconsistentResponseError(DeviceError):
    """The gateway confirmed a different value than the one commanded."""
