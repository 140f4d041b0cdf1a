"""Module for cli device commands."""

from __future__ import annotations

import asyncclick as click

from fritzbox import Client, DeviceOffError

from .common import echo, pass_client


@click.command()
@click.argument("ain")
@pass_client
async def state(client: Client, ain: str):
    """Print out device information."""
    dev = await client.devices.get(ain)
    echo(f"== {dev.name} ({dev.ain}) ==")
    echo(f"Manufacturer: {dev.manufacturer}")
    echo(f"Firmware:     {dev.firmware}")
    echo(f"Connected:    {dev.is_connected}")
    echo(f"Locked:       {dev.is_locked}")
    echo(f"Capabilities: {', '.join(c.name for c in dev.capabilities) or '-'}")
    return dev


@click.command()
@click.argument("ain")
@pass_client
async def on(client: Client, ain: str):
    """Turn the device on."""
    dev = await client.devices.get(ain)
    echo(f"Turning on {dev.name}")
    return await client.devices.turn_on(dev)


@click.command()
@click.argument("ain")
@pass_client
async def off(client: Client, ain: str):
    """Turn the device off."""
    dev = await client.devices.get(ain)
    echo(f"Turning off {dev.name}")
    return await client.devices.turn_off(dev)


@click.command()
@click.argument("ain")
@pass_client
async def toggle(client: Client, ain: str):
    """Toggle the socket on/off."""
    dev = await client.devices.get(ain)
    echo(f"Toggling {dev.name}")
    return await client.devices.toggle(dev)


@click.command()
@click.argument("ain")
@pass_client
async def power(client: Client, ain: str):
    """Print the current power consumption."""
    dev = await client.devices.get(ain)
    res = await client.devices.get_power(dev)
    echo(f"Power: {res} mW")
    return res


@click.command()
@click.argument("ain")
@pass_client
async def energy(client: Client, ain: str):
    """Print the consumed energy."""
    dev = await client.devices.get(ain)
    res = await client.devices.get_energy(dev)
    echo(f"Energy: {res} Wh")
    return res


@click.command()
@click.argument("ain")
@pass_client
async def temperature(client: Client, ain: str):
    """Print the measured temperature."""
    dev = await client.devices.get(ain)
    res = await client.devices.get_temperature(dev)
    echo(f"Temperature: {res:.1f}°C")
    return res


@click.command()
@click.argument("ain")
@click.argument("new_temperature", type=float, required=False)
@pass_client
async def soll(client: Client, ain: str, new_temperature: float | None):
    """Get or set the desired temperature of a thermostat."""
    dev = await client.devices.get(ain)
    if new_temperature is not None:
        echo(f"Setting desired temperature to {new_temperature:.1f}°C")
        await client.devices.set_soll_temperature(dev, new_temperature)

    try:
        res = await client.devices.get_soll_temperature(dev)
    except DeviceOffError:
        echo("Thermostat is off")
        return None
    echo(f"Desired temperature: {res:.1f}°C")
    return res
