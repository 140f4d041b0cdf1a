"""Main module for cli tool."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

import asyncclick as click

from fritzbox import Client, ClientConfig, Credentials
from fritzbox.clientconfig import DEFAULT_BASE_URL

from .common import (
    CatchAllExceptions,
    echo,
    json_formatter_cb,
    pass_client,
)
from .device import energy, off, on, power, soll, state, temperature, toggle


@click.group(
    invoke_without_command=True,
    cls=CatchAllExceptions(click.Group),
    result_callback=json_formatter_cb,
)
@click.option(
    "--host",
    envvar="FRITZBOX_HOST",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="Base url of the gateway.",
)
@click.option(
    "--username",
    envvar="FRITZBOX_USERNAME",
    default="",
    help="Username to authenticate with, empty for password-only logins.",
)
@click.option(
    "--password",
    envvar="FRITZBOX_PASSWORD",
    default="",
    help="Password to authenticate with.",
)
@click.option(
    "--timeout",
    envvar="FRITZBOX_TIMEOUT",
    default=10,
    required=False,
    show_default=True,
    help="Timeout for gateway communications.",
)
@click.option(
    "-d",
    "--debug",
    envvar="FRITZBOX_DEBUG",
    default=False,
    is_flag=True,
    help="Print debug output",
)
@click.option(
    "--json/--no-json",
    envvar="FRITZBOX_JSON",
    default=False,
    is_flag=True,
    help="Output results as JSON.",
)
@click.version_option(package_name="python-fritzbox")
@click.pass_context
async def cli(ctx, host, username, password, timeout, debug, json):
    """A tool for controlling FRITZ!Box smart home devices."""
    # no need to perform any checks if we are just displaying the help
    if "--help" in sys.argv:
        # Context object is required to avoid crashing on sub-groups
        ctx.obj = object()
        return

    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)

    config = ClientConfig(
        base_url=host,
        timeout=timeout,
        credentials=Credentials(username=username, password=password),
    )
    client = Client(config)

    @asynccontextmanager
    async def async_wrapped_client(client: Client):
        try:
            yield client
        finally:
            await client.close()

    ctx.obj = await ctx.with_async_resource(async_wrapped_client(client))
    await client.authenticate()

    if ctx.invoked_subcommand is None:
        return await ctx.invoke(list_devices)


@cli.command()
@pass_client
async def auth(client: Client):
    """Log in and print the session id."""
    echo(f"Successfully logged in, session id: {client}")
    return str(client)


@cli.command(name="list")
@pass_client
async def list_devices(client: Client):
    """List all devices known to the gateway."""
    devices = await client.devices.list()
    for device in devices:
        echo(
            f"{device.ain}\t{device.name}\t"
            f"{'connected' if device.is_connected else 'not connected'}"
        )
    return devices


for command in (state, on, off, toggle, power, energy, temperature, soll):
    cli.add_command(command)
