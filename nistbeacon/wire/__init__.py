"""
nistbeacon.wire
===============

Untrusted-input side of the pipeline:

- :mod:`decode`    — response body → RawRecord (strings only)
- :mod:`normalize` — RawRecord → typed Record with sentinel substitution
"""

from __future__ import annotations

from .decode import decode_record
from .normalize import normalize, parse_hex_int, parse_int, parse_timestamp

__all__ = [
    "decode_record",
    "normalize",
    "parse_int",
    "parse_hex_int",
    "parse_timestamp",
]
