import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone

import pytest
from freezegun.api import FrozenDateTimeFactory

from fritzbox import (
    AuthenticationError,
    SessionExpiredError,
    SessionState,
    TransportError,
)
from fritzbox.session import DEFAULT_EXPIRES, DEFAULT_SID, LOGIN_PATH, SessionInfo

from .conftest import MOCK_CHALLENGE, MOCK_PWD, MOCK_SID, MOCK_USER


async def test_new_session(client, session):
    assert session.client is client
    assert session.sid == DEFAULT_SID
    assert session.expires is None
    assert session.state is SessionState.UNAUTHENTICATED
    assert str(session) == DEFAULT_SID


async def test_open(session, mock_fritzbox):
    await session.open()

    assert session.sid == DEFAULT_SID
    assert session.challenge == MOCK_CHALLENGE
    assert session.block_time == timedelta()
    assert session.state is SessionState.CHALLENGED

    method, url, form = mock_fritzbox.requests[0]
    assert method == "GET"
    assert url.path == f"/{LOGIN_PATH}"
    assert url.query["sid"] == DEFAULT_SID
    assert form == {}


async def test_open_block_time(session, mock_fritzbox):
    mock_fritzbox.block_time = 32
    await session.open()
    assert session.block_time == timedelta(seconds=32)


async def test_open_http_error(session, mock_fritzbox):
    mock_fritzbox.status_code = 500
    with pytest.raises(TransportError, match="500") as exc_info:
        await session.open()
    assert exc_info.value.status == 500


@pytest.mark.parametrize(
    ("sid", "password", "expectation"),
    [
        pytest.param(MOCK_SID, MOCK_PWD, None, id="success"),
        pytest.param(DEFAULT_SID, "äbz", AuthenticationError, id="invalid"),
    ],
)
async def test_authenticate(
    session, mock_fritzbox, freezer: FrozenDateTimeFactory, sid, password, expectation
):
    mock_fritzbox.sid = sid
    session.challenge = MOCK_CHALLENGE

    if expectation:
        with pytest.raises(expectation):
            await session.authenticate("Username", password)
        assert session.sid == DEFAULT_SID
        assert session.state is not SessionState.AUTHENTICATED
    else:
        await session.authenticate("Username", password)
        assert session.sid == sid
        assert session.state is SessionState.AUTHENTICATED
        assert session.expires == datetime.now(timezone.utc) + DEFAULT_EXPIRES
        assert session.rights == {"Dial": 2, "App": 2, "HomeAuto": 2}


async def test_authenticate_sends_response(session, mock_fritzbox):
    session.challenge = MOCK_CHALLENGE
    await session.authenticate(MOCK_USER, MOCK_PWD)

    method, url, form = mock_fritzbox.requests[0]
    assert method == "POST"
    assert url.path == f"/{LOGIN_PATH}"
    assert form == {
        "username": [MOCK_USER],
        "response": ["1234567z-9e224a41eeefa284df7bb0f26c2913e2"],
    }


async def test_authenticate_validates_response_only(session, mock_fritzbox):
    """The username is sent along, only the response decides."""
    mock_fritzbox.password = MOCK_PWD
    await session.open()
    await session.authenticate("someone-else", MOCK_PWD)
    assert session.sid == MOCK_SID

    await session.close()
    await session.open()
    with pytest.raises(AuthenticationError):
        await session.authenticate(MOCK_USER, "wrong")
    assert session.sid == DEFAULT_SID


async def test_close(session):
    session.sid = MOCK_SID
    session.challenge = MOCK_CHALLENGE

    await session.close()
    assert session.sid == DEFAULT_SID
    await session.close()
    assert session.sid == DEFAULT_SID


async def test_is_expired(session, freezer: FrozenDateTimeFactory):
    assert session.is_expired()

    session.expires = datetime.now(timezone.utc) - timedelta(seconds=5)
    assert session.is_expired()

    session.expires = datetime.now(timezone.utc)
    assert session.is_expired()

    session.expires = datetime.now(timezone.utc) + timedelta(seconds=5)
    assert not session.is_expired()


async def test_refresh(session, freezer: FrozenDateTimeFactory):
    await session.refresh()
    assert session.expires == datetime.now(timezone.utc) + DEFAULT_EXPIRES

    freezer.tick(timedelta(minutes=9))
    await session.refresh()
    assert session.expires == datetime.now(timezone.utc) + DEFAULT_EXPIRES


async def test_refresh_expired(session, freezer: FrozenDateTimeFactory):
    session.sid = MOCK_SID
    session.expires = datetime.now(timezone.utc) - timedelta(seconds=5)

    with pytest.raises(SessionExpiredError):
        await session.refresh()
    assert session.sid == DEFAULT_SID


async def test_refresh_after_idle(session, freezer: FrozenDateTimeFactory):
    session.sid = MOCK_SID
    await session.refresh()

    freezer.tick(DEFAULT_EXPIRES)
    with pytest.raises(SessionExpiredError):
        await session.refresh()
    assert session.sid == DEFAULT_SID


async def test_open_discards_expiry(session, mock_fritzbox):
    session.expires = datetime.now(timezone.utc) - timedelta(seconds=5)
    await session.open()
    assert session.challenge == MOCK_CHALLENGE
    assert not session.is_expired()


def test_session_info_rights():
    info = SessionInfo()
    info.update_from_xml(
        ET.fromstring(
            "<SessionInfo><SID>abc</SID><Challenge>c</Challenge>"
            "<BlockTime>0</BlockTime><Rights><Name>NAS</Name><Access>1</Access>"
            "<Name>App</Name><Access>2</Access></Rights></SessionInfo>"
        )
    )
    assert info.sid == "abc"
    assert info.rights == {"NAS": 1, "App": 2}
