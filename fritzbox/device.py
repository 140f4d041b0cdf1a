"""Devices known to the FRITZ!Box.

Devices are snapshots of the ``getdevicelistinfos`` answer, they are not
updated in place. Fetch them again via :meth:`DeviceService.list` to see
changes.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import IntFlag

from .decoding import parse_bool, parse_int
from .exceptions import DecodeError


class Capability(IntFlag):
    """Function bits reported by the gateway."""

    ALARM = 1 << 4
    THERMOSTAT = 1 << 6
    ENERGY_METER = 1 << 7
    TEMPERATURE_SENSOR = 1 << 8
    SOCKET = 1 << 9
    DECT_REPEATER = 1 << 10


def clean_ain(identifier: str) -> str:
    """Remove all whitespace from a device identifier."""
    return "".join(identifier.split())


@dataclass(frozen=True)
class Device:
    """Device as reported by the gateway."""

    identifier: str
    connected: bool = False
    function_bitmask: int = 0
    firmware: str = ""
    manufacturer: str = ""
    name: str = ""
    locked: bool = False

    @classmethod
    def from_xml(cls, element: ET.Element) -> Device:
        """Create a device from a ``device`` element."""
        try:
            bitmask = parse_int(element.get("functionbitmask", "0"))
        except DecodeError as ex:
            raise DecodeError(f"Invalid functionbitmask: {ex}") from ex
        if not 0 <= bitmask <= 0xFFFFFFFF:
            raise DecodeError(f"functionbitmask out of range: {bitmask}")

        return cls(
            identifier=element.get("identifier", ""),
            connected=parse_bool(element.findtext("present") or "0"),
            function_bitmask=bitmask,
            firmware=element.get("fwversion", ""),
            manufacturer=element.get("manufacturer", ""),
            name=element.get("productname", ""),
            locked=parse_bool(element.findtext("switch/lock") or "0"),
        )

    @property
    def ain(self) -> str:
        """Return the identifier as used in commands."""
        return clean_ain(self.identifier)

    @property
    def capabilities(self) -> Capability:
        """Return the known capabilities of the device."""
        known = Capability(0)
        for capability in Capability:
            if self.function_bitmask & capability:
                known |= capability
        return known

    @property
    def is_connected(self) -> bool:
        """Return True if the device is present."""
        return self.connected

    @property
    def is_locked(self) -> bool:
        """Return True if the device is locked."""
        return self.locked

    @property
    def is_thermostat(self) -> bool:
        """Return True if the device is a radiator thermostat."""
        return Capability.THERMOSTAT in self.capabilities

    @property
    def is_socket(self) -> bool:
        """Return True if the device is a switchable socket."""
        return Capability.SOCKET in self.capabilities

    @property
    def is_alarm(self) -> bool:
        """Return True if the device can raise alarms."""
        return Capability.ALARM in self.capabilities

    @property
    def has_energy(self) -> bool:
        """Return True if the device meters energy."""
        return Capability.ENERGY_METER in self.capabilities

    @property
    def has_temperature(self) -> bool:
        """Return True if the device measures temperature."""
        return Capability.TEMPERATURE_SENSOR in self.capabilities

    @property
    def is_dect_repeater(self) -> bool:
        """Return True if the device is a DECT repeater."""
        return Capability.DECT_REPEATER in self.capabilities


@dataclass
class DeviceList:
    """Contents of a ``devicelist`` document."""

    version: str = ""
    devices: list[Device] = field(default_factory=list)

    def update_from_xml(self, root: ET.Element) -> None:
        """Populate from a ``devicelist`` element."""
        if root.tag != "devicelist":
            raise DecodeError(f"Expected devicelist, got {root.tag}")
        self.version = root.get("version", "")
        self.devices = [Device.from_xml(el) for el in root.findall("device")]
