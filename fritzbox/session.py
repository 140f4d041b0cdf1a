"""Session handling for the FRITZ!Box login.

A session goes through the following states:

* ``UNAUTHENTICATED``: the sid is :data:`DEFAULT_SID`.
* ``CHALLENGED``: :meth:`Session.open` fetched a challenge from the gateway.
* ``AUTHENTICATED``: :meth:`Session.authenticate` got a real sid back.

The gateway drops sessions after :data:`DEFAULT_EXPIRES` of inactivity, so
every request slides the expiry forward through :meth:`Session.refresh`.
A session that was idle for longer is closed instead of being revived.
"""

from __future__ import annotations

import asyncio
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum, auto
from typing import TYPE_CHECKING

from .auth import compute_response
from .exceptions import AuthenticationError, DecodeError, SessionExpiredError

if TYPE_CHECKING:
    from .client import Client

_LOGGER = logging.getLogger(__name__)

LOGIN_PATH = "login_sid.lua"

#: Invalid session id used to perform and identify logouts.
DEFAULT_SID = "0000000000000000"
#: Inactivity after which the gateway closes a session.
DEFAULT_EXPIRES = timedelta(minutes=10)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SessionState(Enum):
    """Enum for session state."""

    UNAUTHENTICATED = auto()  # No challenge, no sid
    CHALLENGED = auto()  # Challenge received, login needed
    AUTHENTICATED = auto()  # Ready to send requests


@dataclass
class SessionInfo:
    """Contents of a ``SessionInfo`` document returned by the login page."""

    sid: str = DEFAULT_SID
    challenge: str = ""
    block_time: timedelta = timedelta()
    rights: dict[str, int] = field(default_factory=dict)

    def update_from_xml(self, root: ET.Element) -> None:
        """Populate from a ``SessionInfo`` element."""
        if root.tag != "SessionInfo":
            raise DecodeError(f"Expected SessionInfo, got {root.tag}")

        self.sid = (root.findtext("SID") or DEFAULT_SID).strip()
        self.challenge = (root.findtext("Challenge") or "").strip()
        try:
            self.block_time = timedelta(
                seconds=int(root.findtext("BlockTime") or 0)
            )
        except ValueError as ex:
            raise DecodeError(f"Invalid BlockTime: {ex}") from ex

        # Rights are rendered as alternating Name and Access siblings.
        self.rights = {}
        if (rights := root.find("Rights")) is not None:
            names = [(el.text or "").strip() for el in rights.findall("Name")]
            access = [el.text or "0" for el in rights.findall("Access")]
            try:
                self.rights = {
                    name: int(level) for name, level in zip(names, access)
                }
            except ValueError as ex:
                raise DecodeError(f"Invalid Rights access level: {ex}") from ex


class Session:
    """Represents a FRITZ!Box session."""

    def __init__(self, client: Client) -> None:
        self._client = client
        self._lock = asyncio.Lock()

        self.sid = DEFAULT_SID
        self.challenge = ""
        self.block_time = timedelta()
        self.rights: dict[str, int] = {}
        #: Point in time after which the gateway has dropped the session
        self.expires: datetime | None = None

    def __str__(self) -> str:
        return self.sid

    def __repr__(self) -> str:
        return f"<Session state={self.state.name} expires={self.expires}>"

    @property
    def client(self) -> Client:
        """Return the client the session belongs to."""
        return self._client

    @property
    def state(self) -> SessionState:
        """Return the current state derived from sid and challenge."""
        if self.sid != DEFAULT_SID:
            return SessionState.AUTHENTICATED
        if self.challenge:
            return SessionState.CHALLENGED
        return SessionState.UNAUTHENTICATED

    async def _apply(self, info: SessionInfo) -> None:
        async with self._lock:
            self.sid = info.sid
            self.challenge = info.challenge
            self.block_time = info.block_time
            self.rights = info.rights

    async def open(self) -> None:
        """Retrieve a challenge from the gateway.

        Opening starts a new login, so an expiry left over from a previous
        session is discarded.
        """
        async with self._lock:
            self.expires = None
        request = self._client.build_request("GET", LOGIN_PATH)
        info = SessionInfo()
        await self._client.execute(request, info)
        await self._apply(info)
        if info.block_time:
            _LOGGER.warning(
                "Login is blocked for %s seconds after failed attempts",
                info.block_time.total_seconds(),
            )
        _LOGGER.debug("Received challenge %s", info.challenge)

    async def authenticate(self, username: str, password: str) -> None:
        """Send the response for the current challenge to the gateway.

        :raises AuthenticationError: if the gateway rejected the response.
        """
        response = compute_response(self.challenge, password)
        request = self._client.build_request(
            "POST",
            LOGIN_PATH,
            {"username": username, "response": response},
        )
        info = SessionInfo()
        await self._client.execute(request, info)
        await self._apply(info)

        if info.sid == DEFAULT_SID:
            raise AuthenticationError("Invalid credentials")

        async with self._lock:
            self.expires = _now() + DEFAULT_EXPIRES
        _LOGGER.debug("Authenticated, session expires at %s", self.expires)

    async def close(self) -> None:
        """Close the session, can be called multiple times."""
        async with self._lock:
            self._reset()

    def _reset(self) -> None:
        self.sid = DEFAULT_SID

    def is_expired(self) -> bool:
        """Return True if the session is expired.

        A session that never had an expiry has no remaining life either.
        """
        return self.expires is None or self.expires <= _now()

    async def refresh(self) -> None:
        """Extend the expiry of the session.

        :raises SessionExpiredError: if the session was idle for too long,
            the session is closed in that case.
        """
        async with self._lock:
            if self.expires is not None and self.is_expired():
                _LOGGER.debug("Session expired at %s, closing", self.expires)
                self._reset()
                raise SessionExpiredError(
                    f"Session expired after {DEFAULT_EXPIRES} of inactivity"
                )
            self.expires = _now() + DEFAULT_EXPIRES
