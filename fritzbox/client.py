"""Client managing the communication with a FRITZ!Box.

>>> from fritzbox import Client, ClientConfig
>>> async with Client(ClientConfig(base_url="http://192.168.178.1/")) as client:
>>>     await client.authenticate("user", "password")
>>>     for device in await client.devices.list():
>>>         print(device.name, await client.devices.get_power(device))

Requests are resolved against the configured base url and carry the session
id of the attached session as ``sid`` query parameter.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any
from urllib.parse import urlencode

from yarl import URL

from .clientconfig import ClientConfig
from .decoding import decode_response
from .devices import DeviceService
from .exceptions import MalformedUrlError, TransportError
from .httpclient import HttpClient
from .session import DEFAULT_SID, Session

_LOGGER = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass
class Request:
    """A request ready to be sent to the gateway."""

    method: str
    url: URL
    data: bytes | None = None
    headers: dict[str, str] = field(default_factory=dict)


class Client:
    """Client for the FRITZ!Box http interface."""

    def __init__(self, config: ClientConfig | None = None) -> None:
        self._config = config or ClientConfig()
        self._http_client = HttpClient(self._config)
        self._session: Session | None = None
        self._handshake_lock = asyncio.Lock()
        self.base_url = URL(self._config.base_url)
        self.devices = DeviceService(self)

    def __str__(self) -> str:
        return str(self._session) if self._session else DEFAULT_SID

    def __repr__(self) -> str:
        return f"<Client {self.base_url} session={self._session!r}>"

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def base_url(self) -> URL:
        """Return the url requests are resolved against."""
        return self._base_url

    @base_url.setter
    def base_url(self, base_url: str | URL) -> None:
        self._base_url = URL(base_url)

    @property
    def config(self) -> ClientConfig:
        """Return the client configuration."""
        return self._config

    @property
    def session(self) -> Session | None:
        """Return the session used to authenticate requests, if any."""
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        self._session = session

    def build_request(
        self,
        method: str,
        path: str,
        data: Mapping[str, str] | None = None,
    ) -> Request:
        """Create a request for the given path.

        The path is resolved relative to the base url, relative paths should
        be given without a leading slash. If data is given it is sent as
        url encoded form body.
        """
        if _INVALID_ESCAPE.search(path):
            raise MalformedUrlError(f"Invalid escape sequence in {path!r}")
        try:
            url = self.base_url.join(URL(path))
        except (ValueError, TypeError) as ex:
            raise MalformedUrlError(f"Unable to resolve {path!r}: {ex}") from ex
        if not url.is_absolute():
            raise MalformedUrlError(
                f"Unable to resolve {path!r} against base url {self.base_url}"
            )

        if self._session is not None:
            url = url.update_query(sid=self._session.sid)

        body = None
        headers: dict[str, str] = {}
        if data is not None:
            body = urlencode(data).encode()
            headers["Content-Type"] = FORM_CONTENT_TYPE

        return Request(method, url, body, headers)

    async def execute(self, request: Request, target: Any = None) -> bytes:
        """Send a request and decode the response into target.

        The raw response body is returned. See
        :func:`fritzbox.decoding.decode_response` for the supported targets.

        :raises SessionExpiredError: if the attached session expired, the
            request is not sent in that case.
        :raises TransportError: if the exchange failed or the status code
            does not indicate success.
        """
        if self._session is not None:
            await self._session.refresh()

        status, content_type, body = await self._http_client.request(
            request.method,
            request.url,
            data=request.data,
            headers=request.headers,
        )
        if not 200 <= status <= 299:
            raise TransportError(
                f"{request.url.host} responded with an unexpected "
                + f"status code {status} to {request.url.path}",
                status=status,
            )

        decode_response(content_type, body, target)
        return body

    async def authenticate(
        self, username: str | None = None, password: str | None = None
    ) -> None:
        """Log in to the gateway.

        If neither username nor password are given the credentials of the
        configuration are used. The session is kept on the client and used
        for all further requests.
        """
        if username is None and password is None and self._config.credentials:
            username = self._config.credentials.username
            password = self._config.credentials.password

        if self._session is None:
            self._session = Session(self)

        async with self._handshake_lock:
            await self._session.open()
            await self._session.authenticate(username or "", password or "")
        _LOGGER.debug("Logged in to %s", self.base_url)

    async def close(self) -> None:
        """Close the session and release the http client."""
        if self._session is not None:
            await self._session.close()
        await self._http_client.close()
