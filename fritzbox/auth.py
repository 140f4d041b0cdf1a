"""Challenge-response computation for the FRITZ!Box login."""

from __future__ import annotations

import hashlib

# Code units above Latin-1 cannot be represented by the gateway and are
# replaced by "." before hashing.
_MAX_CODE_UNIT = 0xFF
_REPLACEMENT = b".\x00"


def _md5(payload: bytes) -> str:
    md5_algo = hashlib.md5()  # noqa: S324
    md5_algo.update(payload)
    return md5_algo.hexdigest()


def compute_response(challenge: str, secret: str) -> str:
    """Return the response for the given challenge and secret.

    The string ``<challenge>-<secret>`` is encoded as UTF-16LE, every code
    unit above 255 is replaced with ``"."`` and the result is MD5 hashed.
    The response is ``<challenge>-<hexdigest>``.
    """
    encoded = f"{challenge}-{secret}".encode("utf-16-le", "surrogatepass")
    payload = b"".join(
        unit if int.from_bytes(unit, "little") <= _MAX_CODE_UNIT else _REPLACEMENT
        for unit in (encoded[i : i + 2] for i in range(0, len(encoded), 2))
    )
    return f"{challenge}-{_md5(payload)}"
