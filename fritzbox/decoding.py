"""Decoding of gateway response bodies.

All response decoding goes through :func:`decode_response`. Targets are
populated in place:

* raw sinks (anything with a ``write`` method, or a ``bytearray``) receive the
  body verbatim, which is how the plain-text command answers are read,
* XML bodies are handed to ``target.update_from_xml(root)``,
* JSON bodies are handed to ``target.update_from_json(data)``,
* plain dicts are updated with the top level XML children or JSON members.

A body whose content type is neither XML nor JSON leaves a structured target
untouched.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any, Protocol, runtime_checkable

from .exceptions import DecodeError
from .json import JSONDecodeError
from .json import loads as json_loads

_LOGGER = logging.getLogger(__name__)

XML_CONTENT_TYPES = ("text/xml", "application/xml")
JSON_CONTENT_TYPES = ("application/json",)


@runtime_checkable
class XmlDecodable(Protocol):
    """Target that can be populated from an XML element tree."""

    def update_from_xml(self, root: ET.Element) -> None:
        """Populate the target from the document root."""


@runtime_checkable
class JsonDecodable(Protocol):
    """Target that can be populated from decoded JSON."""

    def update_from_json(self, data: Any) -> None:
        """Populate the target from the decoded document."""


def decode_response(content_type: str, body: bytes, target: Any) -> None:
    """Decode body into target according to the declared content type."""
    if target is None:
        return

    if isinstance(target, bytearray):
        target.extend(body)
        return
    if callable(getattr(target, "write", None)):
        target.write(body)
        return

    content_type = content_type.lower()
    if any(ct in content_type for ct in XML_CONTENT_TYPES):
        _decode_xml(body, target)
    elif any(ct in content_type for ct in JSON_CONTENT_TYPES):
        _decode_json(body, target)
    else:
        # Unknown content types are ignored rather than rejected, callers
        # relying on a populated target have to check for themselves.
        _LOGGER.debug(
            "Not decoding response with content type %r into %s",
            content_type,
            type(target).__name__,
        )


def _decode_xml(body: bytes, target: Any) -> None:
    try:
        root = ET.fromstring(body)
    except ET.ParseError as ex:
        raise DecodeError(f"Unable to decode xml response: {ex}") from ex

    if isinstance(target, dict):
        target.update({child.tag: child.text for child in root})
    elif isinstance(target, XmlDecodable):
        target.update_from_xml(root)
    else:
        raise TypeError(f"{type(target).__name__} cannot be decoded from xml")


def _decode_json(body: bytes, target: Any) -> None:
    try:
        data = json_loads(body)
    except JSONDecodeError as ex:
        raise DecodeError(f"Unable to decode json response: {ex}") from ex

    if isinstance(target, dict):
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a json object, got {type(data).__name__}")
        target.update(data)
    elif isinstance(target, JsonDecodable):
        target.update_from_json(data)
    else:
        raise TypeError(f"{type(target).__name__} cannot be decoded from json")


_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


def parse_bool(text: str) -> bool:
    """Parse a boolean as rendered by the gateway."""
    text = text.strip()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise DecodeError(f"Invalid boolean: {text!r}")


def parse_int(text: str) -> int:
    """Parse a base 10 integer as rendered by the gateway."""
    try:
        return int(text.strip(), 10)
    except ValueError as ex:
        raise DecodeError(f"Invalid integer: {text!r}") from ex
