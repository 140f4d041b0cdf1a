"""Credentials class for username / passwords."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Credentials:
    """Credentials for authentication."""

    #: Username of the FRITZ!Box user, may be empty for password-only setups
    username: str = field(default="", repr=False)
    #: Password of the FRITZ!Box user
    password: str = field(default="", repr=False)
