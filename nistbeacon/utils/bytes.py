# Copyright (c) Animica.
# SPDX-License-Identifier: MIT
"""
nistbeacon.utils.bytes
======================

Small utilities for the byte-level work behind signature checks: strict hex
decoding, fixed-width big-endian integer encoding and byte-order reversal.

Highlights
----------
- :func:`from_hex` with strict validation (the beacon emits
  bare hex, no ``0x`` prefix).
- :func:`be_int` fixed-width two's-complement big-endian encoding.
- :func:`reverse_bytes` for the beacon's little-endian signature layout.
"""

from __future__ import annotations

import re
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]

__all__ = [
    "from_hex",
    "as_bytes",
    "reverse_bytes",
    "be_int",
]

# -----------------
# Hex <-> Bytes I/O
# -----------------

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def from_hex(s: str) -> bytes:
    """
    Convert a bare hex string to bytes.

    Strict rules:
    - No whitespace, no ``0x`` prefix.
    - Only 0-9a-fA-F characters.
    - Even-length nibble count.
    """
    if not isinstance(s, str):
        raise TypeError("from_hex expects a str")
    if not _HEX_RE.fullmatch(s):
        raise ValueError("invalid hex string (characters or whitespace)")
    if len(s) % 2 != 0:
        raise ValueError("hex string must have an even number of nibbles")
    return bytes.fromhex(s)


def as_bytes(x: BytesLike) -> bytes:
    """Normalize bytes-like to immutable :class:`bytes`."""
    if isinstance(x, bytes):
        return x
    if isinstance(x, (bytearray, memoryview)):
        return bytes(x)
    raise TypeError(f"expected bytes-like, got {type(x)!r}")


def reverse_bytes(b: BytesLike) -> bytes:
    """Return *b* with its byte order reversed."""
    return as_bytes(b)[::-1]


def be_int(value: int, width: int) -> bytes:
    """
    Encode *value* as a signed big-endian integer of exactly *width* bytes.

    Raises OverflowError if the value does not fit.
    """
    if width <= 0:
        raise ValueError("width must be > 0")
    return int(value).to_bytes(width, "big", signed=True)
