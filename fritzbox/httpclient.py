"""Module for HttpClient class."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
from yarl import URL

from .clientconfig import ClientConfig
from .exceptions import (
    TimeoutError,
    TransportError,
    _ConnectionError,
)

_LOGGER = logging.getLogger(__name__)


class HttpClient:
    """Performs single http exchanges with the gateway."""

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._client_session: aiohttp.ClientSession | None = None

    @property
    def client(self) -> aiohttp.ClientSession:
        """Return the underlying http client."""
        if self._config.http_client and issubclass(
            self._config.http_client.__class__, aiohttp.ClientSession
        ):
            return self._config.http_client

        if not self._client_session:
            self._client_session = aiohttp.ClientSession()
        return self._client_session

    async def request(
        self,
        method: str,
        url: URL,
        *,
        data: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> tuple[int, str, bytes]:
        """Send a request and return status, content type and raw body.

        Status codes are not interpreted here, the caller decides which ones
        are acceptable.
        """
        _LOGGER.debug("%s %s", method, url.with_query(None))
        if self._config.timeout is None:
            _LOGGER.warning("Request timeout is set to None.")
        client_timeout = aiohttp.ClientTimeout(total=self._config.timeout)

        try:
            resp = await self.client.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=client_timeout,
            )
            async with resp:
                body = await resp.read()
        except (
            aiohttp.ServerDisconnectedError,
            aiohttp.ClientOSError,
            aiohttp.ClientConnectionError,
        ) as ex:
            if isinstance(ex, aiohttp.ServerTimeoutError):
                raise TimeoutError(
                    f"Unable to query the gateway, timed out: {url.host}: {ex}", ex
                ) from ex
            raise _ConnectionError(
                f"Gateway connection error: {url.host}: {ex}", ex
            ) from ex
        except asyncio.TimeoutError as ex:
            raise TimeoutError(
                f"Unable to query the gateway, timed out: {url.host}: {ex}", ex
            ) from ex
        except Exception as ex:
            raise TransportError(
                f"Unable to query the gateway: {url.host}: {ex}", ex
            ) from ex

        content_type = resp.headers.get("Content-Type", "")
        _LOGGER.debug(
            "Gateway %s responded with status %s (%s, %s bytes)",
            url.host,
            resp.status,
            content_type or "no content type",
            len(body),
        )
        return resp.status, content_type, body

    async def close(self) -> None:
        """Close the ClientSession."""
        client = self._client_session
        self._client_session = None
        if client:
            await client.close()
