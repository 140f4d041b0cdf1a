"""Device commands of the FRITZ!Box home automation interface.

All commands are sent to :data:`DEVICE_PATH` with a ``switchcmd`` parameter
and the cleaned identifier of the device as ``ain``. Apart from the device
list the gateway answers with a single plain-text token.
"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING

from yarl import URL

from .decoding import parse_bool, parse_int
from .device import Device, DeviceList, clean_ain
from .exceptions import (
    DeviceLockedError,
    DeviceNotConnectedError,
    DeviceNotFoundError,
    DeviceOffError,
    InconsistentResponseError,
    InvalidArgumentError,
    UnsupportedOperationError,
)

if TYPE_CHECKING:
    from .client import Client

_LOGGER = logging.getLogger(__name__)

DEVICE_PATH = "/webservices/homeautoswitch.lua"

# Setpoint values with a special meaning for thermostats
THERMOSTAT_ON = 254
THERMOSTAT_OFF = 253

MIN_SOLL_TEMPERATURE = 8
MAX_SOLL_TEMPERATURE = 28


def command_url(cmd: str, params: dict[str, str] | None = None) -> str:
    """Return the relative url for the given command."""
    query = {"switchcmd": cmd}
    if params:
        query.update(params)
    return str(URL(DEVICE_PATH).with_query(query))


def _precheck(device: Device, require_unlocked: bool) -> None:
    if not device.is_connected:
        raise DeviceNotConnectedError(
            f"Device {device.identifier!r} is not connected", device=device
        )
    if require_unlocked and device.is_locked:
        raise DeviceLockedError(
            f"Device {device.identifier!r} is locked, unlock it via the gateway ui",
            device=device,
        )


class DeviceService:
    """Handles devices connected to the gateway."""

    def __init__(self, client: Client) -> None:
        self._client = client

    async def _query(self, cmd: str, device: Device, **params: str) -> str:
        params["ain"] = device.ain
        request = self._client.build_request("GET", command_url(cmd, params))
        _LOGGER.debug("Sending %s for %s", cmd, device.ain)

        buf = io.BytesIO()
        await self._client.execute(request, buf)
        return buf.getvalue().decode("utf-8", "replace").strip()

    async def list(self) -> list[Device]:
        """Return all devices known to the gateway."""
        request = self._client.build_request(
            "GET", command_url("getdevicelistinfos")
        )
        device_list = DeviceList()
        await self._client.execute(request, device_list)
        return device_list.devices

    async def get(self, ain: str) -> Device:
        """Return the device with the given identifier.

        :raises DeviceNotFoundError: if no such device exists.
        """
        ain = clean_ain(ain)
        for device in await self.list():
            if device.ain == ain:
                return device
        raise DeviceNotFoundError(f"Device {ain!r} could not be found")

    async def turn_on(self, device: Device) -> bool:
        """Turn a socket or thermostat on.

        Devices that are neither are left alone.
        """
        _precheck(device, True)
        if device.is_socket:
            await self._query("setswitchon", device)
        elif device.is_thermostat:
            await self._query("sethkrtsoll", device, param=str(THERMOSTAT_ON))
        return True

    async def turn_off(self, device: Device) -> bool:
        """Turn a socket or thermostat off and return the confirmed state.

        Devices that are neither are left alone.
        """
        _precheck(device, True)
        if device.is_socket:
            return parse_bool(await self._query("setswitchoff", device))
        if device.is_thermostat:
            resp = await self._query(
                "sethkrtsoll", device, param=str(THERMOSTAT_OFF)
            )
            return resp == str(THERMOSTAT_OFF)
        return True

    async def toggle(self, device: Device) -> bool:
        """Switch a socket on if it is off, or off if it is on."""
        _precheck(device, True)
        if not device.is_socket:
            raise UnsupportedOperationError(
                f"Device {device.identifier!r} does not support toggling",
                device=device,
            )
        await self._query("setswitchtoggle", device)
        return True

    async def get_power(self, device: Device) -> int:
        """Return the power currently consumed in mW."""
        _precheck(device, False)
        if not device.has_energy:
            raise UnsupportedOperationError(
                f"Device {device.identifier!r} does not support getting power",
                device=device,
            )
        return parse_int(await self._query("getswitchpower", device))

    async def get_energy(self, device: Device) -> int:
        """Return the energy consumed since the last reset in Wh."""
        _precheck(device, False)
        if not device.has_energy:
            raise UnsupportedOperationError(
                f"Device {device.identifier!r} does not support getting energy",
                device=device,
            )
        return parse_int(await self._query("getswitchenergy", device))

    async def get_temperature(self, device: Device) -> float:
        """Return the measured temperature in degrees Celsius."""
        _precheck(device, False)
        if not device.has_temperature:
            raise UnsupportedOperationError(
                f"Device {device.identifier!r} does not support getting temperature",
                device=device,
            )
        # 200 is 20.0 degrees
        return parse_int(await self._query("gettemperature", device)) / 10

    async def get_soll_temperature(self, device: Device) -> float:
        """Return the desired temperature of a thermostat.

        :raises DeviceOffError: if the thermostat is switched off.
        """
        _precheck(device, False)
        if not device.is_thermostat:
            raise UnsupportedOperationError(
                f"Device {device.identifier!r} does not support getting "
                "soll temperature",
                device=device,
            )
        temp = parse_int(await self._query("gethkrtsoll", device))
        if temp in (THERMOSTAT_OFF, THERMOSTAT_ON):
            raise DeviceOffError(f"Device {device.identifier!r} is off", device=device)
        # Half degree steps, 16 is 8.0 and 17 is 8.5 degrees
        return temp / 2

    async def set_soll_temperature(self, device: Device, temp: float) -> None:
        """Set the desired temperature of a thermostat.

        :raises InvalidArgumentError: if temp is not between 8 and 28 degrees.
        :raises InconsistentResponseError: if the gateway confirmed a
            different temperature.
        """
        _precheck(device, True)
        if not device.is_thermostat:
            raise UnsupportedOperationError(
                f"Device {device.identifier!r} does not support setting "
                "soll temperature",
                device=device,
            )
        if not MIN_SOLL_TEMPERATURE <= temp <= MAX_SOLL_TEMPERATURE:
            raise InvalidArgumentError(
                f"Temperature needs to be between {MIN_SOLL_TEMPERATURE} "
                f"and {MAX_SOLL_TEMPERATURE}, got {temp}"
            )

        param = str(round(temp * 2))
        resp = await self._query("sethkrtsoll", device, param=param)
        if resp != param:
            raise InconsistentResponseError(
                f"New temperature {resp!r} does not match desired temperature "
                f"{param!r}",
                device=device,
            )
