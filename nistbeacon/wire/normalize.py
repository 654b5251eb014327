"""
nistbeacon.wire.normalize
=========================

Record normalizer: :class:`RawRecord` strings → typed :class:`Record`.

Normalization is total. A field that fails to parse is replaced by the
sentinel ``-1`` instead of failing the record; signature verification rejects
such a record independently. The only error raised here is `NormalizeError`,
for fields the caller declared mandatory and that are absent altogether.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable

from ..constants import SENTINEL
from ..errors import NormalizeError
from ..types.core import RawRecord, Record
from ..utils.time import from_unix

__all__ = ["parse_int", "parse_hex_int", "parse_timestamp", "normalize"]

_DEC_RE = re.compile(r"[+-]?[0-9]+")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")

# Decimal fields are machine integers on the wire; anything wider is corrupt.
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def parse_int(s: str) -> int:
    """Base-10 integer, or the sentinel when *s* is not one."""
    if not isinstance(s, str) or not _DEC_RE.fullmatch(s):
        return SENTINEL
    value = int(s, 10)
    if not (_INT64_MIN <= value <= _INT64_MAX):
        return SENTINEL
    return value


def parse_hex_int(s: str) -> int:
    """Unsigned base-16 big integer, or the sentinel when *s* is not one."""
    if not isinstance(s, str) or not _HEX_RE.fullmatch(s):
        return SENTINEL
    return int(s, 16)


def parse_timestamp(s: str) -> datetime:
    """UTC datetime for epoch seconds *s*; the sentinel instant when unparsable
    or outside the range datetime can represent."""
    try:
        return from_unix(parse_int(s))
    except OverflowError:
        return from_unix(SENTINEL)


def normalize(raw: RawRecord, *, required: Iterable[str] = ()) -> Record:
    """
    Convert every field of *raw* to its typed counterpart.

    Args:
        raw: decoder output.
        required: RawRecord attribute names that must be non-empty.

    Raises:
        NormalizeError: a required field is empty.
    """
    for name in required:
        if not getattr(raw, name, ""):
            raise NormalizeError(name)

    return Record(
        version=raw.version,
        frequency=parse_int(raw.frequency),
        timestamp=parse_timestamp(raw.timestamp),
        seed_value=parse_hex_int(raw.seed_value),
        previous_output_value=parse_hex_int(raw.previous_output_value),
        signature_value=parse_hex_int(raw.signature_value),
        output_value=parse_hex_int(raw.output_value),
        status_code=parse_int(raw.status_code),
    )
