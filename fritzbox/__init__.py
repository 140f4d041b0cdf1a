"""Python interface for the AVM FRITZ!Box home automation interface.

All communication goes through :class:`Client`, devices are controlled via
:attr:`Client.devices`::

>>> from fritzbox import Client
>>> client = Client()
>>> await client.authenticate("user", "password")
>>> devices = await client.devices.list()
>>> await client.devices.turn_on(devices[0])

Errors are raised as subclasses of `FritzboxException` and are expected
to be handled by the user of the library.
"""

from importlib.metadata import version

from fritzbox.auth import compute_response
from fritzbox.client import Client, Request
from fritzbox.clientconfig import ClientConfig
from fritzbox.credentials import Credentials
from fritzbox.device import Capability, Device, DeviceList
from fritzbox.devices import DeviceService
from fritzbox.exceptions import (
    AuthenticationError,
    DecodeError,
    DeviceError,
    DeviceLockedError,
    DeviceNotConnectedError,
    DeviceNotFoundError,
    DeviceOffError,
    FritzboxException,
    InconsistentResponseError,
    InvalidArgumentError,
    MalformedUrlError,
    SessionExpiredError,
    TimeoutError,
    TransportError,
    UnsupportedOperationError,
)
from fritzbox.session import DEFAULT_EXPIRES, DEFAULT_SID, Session, SessionState

__version__ = version("python-fritzbox")


__all__ = [
    "Client",
    "ClientConfig",
    "Credentials",
    "Request",
    "Session",
    "SessionState",
    "DEFAULT_SID",
    "DEFAULT_EXPIRES",
    "compute_response",
    "Device",
    "DeviceList",
    "DeviceService",
    "Capability",
    "FritzboxException",
    "MalformedUrlError",
    "TransportError",
    "TimeoutError",
    "DecodeError",
    "AuthenticationError",
    "SessionExpiredError",
    "InvalidArgumentError",
    "DeviceError",
    "DeviceNotConnectedError",
    "DeviceLockedError",
    "DeviceNotFoundError",
    "UnsupportedOperationError",
    "DeviceOffError",
    "InconsistentResponseError",
]
