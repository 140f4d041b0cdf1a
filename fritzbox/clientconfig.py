"""Configuration for connecting to a FRITZ!Box.

The configuration can be stored and restored as a plain dict:

>>> from fritzbox import ClientConfig
>>> config = ClientConfig(base_url="http://192.168.178.1/", timeout=5)
>>> config.to_dict()
{'base_url': 'http://192.168.178.1/', 'timeout': 5}

An existing :class:`aiohttp.ClientSession` can be handed over via
``http_client``, which is also the way to talk to a remote gateway over TLS
with a custom trust configuration. The session is never serialized and never
closed by the library.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Self

from aiohttp import ClientSession
from mashumaro import field_options
from mashumaro.config import BaseConfig
from mashumaro.types import SerializationStrategy

from .credentials import Credentials
from .json import DataClassJSONMixin

if TYPE_CHECKING:
    from aiohttp import ClientSession

DEFAULT_BASE_URL = "http://fritz.box/"


class _DoNotSerialize(SerializationStrategy):
    def serialize(self, value: Any) -> None:
        return None

    def deserialize(self, value: Any) -> None:
        return None


@dataclass
class ClientConfig(DataClassJSONMixin):
    """Class to represent parameters that determine how to reach the gateway."""

    class Config(BaseConfig):
        """Serialization config."""

        omit_none = True

    DEFAULT_TIMEOUT = 10
    #: Base URL all request paths are resolved against.
    #: Should always be specified with a trailing slash.
    base_url: str = DEFAULT_BASE_URL
    #: Timeout in seconds for a single request
    timeout: int | None = DEFAULT_TIMEOUT
    #: Credentials used when :meth:`Client.authenticate` is called without any
    credentials: Credentials | None = None

    # compare=False will be excluded from object comparison.
    #: Set a custom http_client for the client to use.
    http_client: ClientSession | None = field(
        default=None,
        compare=False,
        metadata=field_options(serialization_strategy=_DoNotSerialize()),
    )

    def __pre_serialize__(self) -> Self:
        return replace(self, http_client=None)
