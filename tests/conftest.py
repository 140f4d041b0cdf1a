from __future__ import annotations

import asyncio
from urllib.parse import parse_qs

import aiohttp
import pytest
from yarl import URL

from fritzbox import Client, ClientConfig, Device, Session, compute_response
from fritzbox.session import DEFAULT_SID

HOST = "127.0.0.1"
BASE_URL = f"http://{HOST}/"

MOCK_SID = "ff88e4d39354992f"
MOCK_CHALLENGE = "1234567z"
MOCK_USER = "username"
MOCK_PWD = "äbc"  # noqa: S105

SESSION_INFO_XML = """<?xml version="1.0" encoding="utf-8"?>
<SessionInfo>
  <SID>{sid}</SID>
  <Challenge>{challenge}</Challenge>
  <BlockTime>{block_time}</BlockTime>
  <Rights>{rights}</Rights>
</SessionInfo>"""

RIGHTS_XML = (
    "<Name>Dial</Name><Access>2</Access>"
    "<Name>App</Name><Access>2</Access>"
    "<Name>HomeAuto</Name><Access>2</Access>"
)

DEVICE_LIST_XML = """<devicelist version="1">
  <device identifier="08761 0000434" id="17" functionbitmask="2944"
          fwversion="03.33" manufacturer="AVM" productname="FRITZ!DECT 200">
    <present>1</present>
    <name>Living room</name>
    <switch><state>1</state><mode>auto</mode><lock>0</lock></switch>
    <powermeter><power>0</power><energy>707</energy></powermeter>
    <temperature><celsius>285</celsius><offset>0</offset></temperature>
  </device>
  <device identifier="11960 0089208" id="18" functionbitmask="320"
          fwversion="03.54" manufacturer="AVM" productname="Comet DECT">
    <present>1</present>
    <name>Bathroom</name>
  </device>
  <device identifier="08761 0000435" id="19" functionbitmask="1024"
          fwversion="03.54" manufacturer="AVM" productname="FRITZ!DECT Repeater 100">
    <present>0</present>
  </device>
</devicelist>"""

SOCKET = Device(
    identifier="08761 0000434",
    connected=True,
    function_bitmask=2944,
    firmware="03.33",
    manufacturer="AVM",
    name="FRITZ!DECT 200",
)
THERMOSTAT = Device(
    identifier="11960 0089208",
    connected=True,
    function_bitmask=320,
    firmware="03.54",
    manufacturer="AVM",
    name="Comet DECT",
)
REPEATER = Device(
    identifier="08761 0000435",
    connected=False,
    function_bitmask=1024,
    firmware="03.54",
    manufacturer="AVM",
    name="FRITZ!DECT Repeater 100",
)


class MockFritzBox:
    """Stands in for the gateway by answering aiohttp requests."""

    class _mock_response:
        def __init__(self, status: int, body: str | bytes, content_type: str):
            self.status = status
            self.headers = {"Content-Type": content_type} if content_type else {}
            self._body = body.encode() if isinstance(body, str) else body

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_t, exc_v, exc_tb):
            pass

        async def read(self):
            return self._body

    def __init__(
        self,
        *,
        sid: str = MOCK_SID,
        challenge: str = MOCK_CHALLENGE,
        password: str | None = None,
        block_time: int = 0,
        device_list: str = DEVICE_LIST_XML,
        commands: dict[str, str] | None = None,
        status_code: int = 200,
    ) -> None:
        self.sid = sid
        self.challenge = challenge
        self.password = password
        self.block_time = block_time
        self.device_list = device_list
        self.commands = commands or {}
        self.status_code = status_code
        #: (method, url, form data) of every request received
        self.requests: list[tuple[str, URL, dict[str, list[str]]]] = []

    @property
    def switchcmds(self) -> list[str]:
        return [
            url.query["switchcmd"]
            for _, url, _ in self.requests
            if "switchcmd" in url.query
        ]

    def _session_info(self, sid: str) -> str:
        return SESSION_INFO_XML.format(
            sid=sid,
            challenge=self.challenge,
            block_time=self.block_time,
            rights=RIGHTS_XML if sid != DEFAULT_SID else "",
        )

    async def request(self, method, url, *, data=None, headers=None, **__):
        # Hand control back to the loop like a real network round trip
        await asyncio.sleep(0)
        url = URL(url)
        form = parse_qs(data.decode()) if data else {}
        self.requests.append((method, url, form))

        if self.status_code != 200:
            return self._mock_response(self.status_code, "Bad Request", "text/plain")

        if url.path == "/login_sid.lua":
            sid = DEFAULT_SID
            if method == "POST":
                sid = self.sid
                if self.password is not None and form["response"] != [
                    compute_response(self.challenge, self.password)
                ]:
                    sid = DEFAULT_SID
            return self._mock_response(200, self._session_info(sid), "text/xml")

        if url.path == "/webservices/homeautoswitch.lua":
            cmd = url.query["switchcmd"]
            if cmd == "getdevicelistinfos":
                return self._mock_response(
                    200, self.device_list, "text/xml; charset=utf-8"
                )
            return self._mock_response(
                200, self.commands.get(cmd, "") + "\n", "text/plain; charset=utf-8"
            )

        return self._mock_response(404, "Not Found", "text/html")


@pytest.fixture
def mock_fritzbox(mocker):
    """Return a mock gateway receiving all aiohttp requests."""
    fritzbox = MockFritzBox()
    mocker.patch.object(aiohttp.ClientSession, "request", side_effect=fritzbox.request)
    return fritzbox


@pytest.fixture
async def client():
    """Return a client talking to the mock gateway host."""
    client = Client(ClientConfig(base_url=BASE_URL))
    yield client
    await client.close()


@pytest.fixture
async def authed_client(client, mock_fritzbox):
    """Return a client with an authenticated session."""
    await client.authenticate(MOCK_USER, MOCK_PWD)
    mock_fritzbox.requests.clear()
    return client


@pytest.fixture
def session(client):
    """Return a fresh session attached to the client."""
    session = Session(client)
    client.session = session
    return session
