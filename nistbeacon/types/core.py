from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Tuple

"""
Core typed primitives for the beacon client.

Types provided:
  • RawRecord           — untrusted decoder output, every field a string
  • Record              — verified, typed beacon record
  • VerificationPayload — the exact bytes the beacon signed, plus the
                          signature in verifier byte order

Numeric fields of a Record that failed to parse hold the sentinel ``-1``
(see `nistbeacon.constants.SENTINEL`). Zero is a legitimate value and is never
used to signal failure; use `Record.invalid_fields()` to tell them apart.
"""

from ..constants import SENTINEL
from ..utils.time import to_unix

# Big-integer fields and their hex widths (nibbles) for zero-padded rendering.
_HEX_FIELDS: Tuple[Tuple[str, int], ...] = (
    ("seed_value", 128),
    ("previous_output_value", 128),
    ("signature_value", 512),
    ("output_value", 128),
)

_INT_FIELDS: Tuple[str, ...] = ("frequency", "timestamp", "status_code")


def format_hex(value: int, nibbles: int) -> str:
    """
    Render a non-negative big integer as upper-case hex, zero-padded to at
    least *nibbles* characters. The sentinel renders as ``"-1"``.
    """
    if value < 0:
        return str(value)
    return format(value, f"0{nibbles}X")


# ---- Wire record -------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RawRecord:
    """
    A record exactly as received. Absent elements are empty strings.

    Never leaves the fetch pipeline; it is consumed by normalization and by
    signature verification.
    """

    version: str = ""
    frequency: str = ""
    timestamp: str = ""
    seed_value: str = ""
    previous_output_value: str = ""
    signature_value: str = ""
    output_value: str = ""
    status_code: str = ""


# ---- Verified record ---------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Record:
    """
    A verified beacon output.

    Fields:
      version               — record format version string
      frequency             — seconds between successive records
      timestamp             — UTC time the record was generated
      seed_value            — 512-bit seed
      previous_output_value — output of the preceding record
      signature_value       — signature as emitted (beacon byte order)
      output_value          — SHA-512 output value
      status_code           — beacon status code (0 means normal operation)
    """

    version: str
    frequency: int
    timestamp: datetime
    seed_value: int
    previous_output_value: int
    signature_value: int
    output_value: int
    status_code: int = 0

    @property
    def timestamp_unix(self) -> int:
        return to_unix(self.timestamp)

    def invalid_fields(self) -> Tuple[str, ...]:
        """Names of numeric fields that hold the parse-failure sentinel."""
        bad = []
        for name in _INT_FIELDS:
            value = self.timestamp_unix if name == "timestamp" else getattr(self, name)
            if value == SENTINEL:
                bad.append(name)
        for name, _ in _HEX_FIELDS:
            if getattr(self, name) == SENTINEL:
                bad.append(name)
        return tuple(bad)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view; big integers as zero-padded upper-case hex."""
        out: Dict[str, Any] = {
            "version": self.version,
            "frequency": self.frequency,
            "timestamp": self.timestamp_unix,
            "timestamp_iso": self.timestamp.isoformat(),
        }
        for name, nibbles in _HEX_FIELDS:
            out[name] = format_hex(getattr(self, name), nibbles)
        out["status_code"] = self.status_code
        return out


# ---- Signature input ---------------------------------------------------------


@dataclass(frozen=True, slots=True)
class VerificationPayload:
    """
    Bytes handed to the certificate's verification primitive.

    Fields:
      signed    — version ‖ frequency ‖ timestamp ‖ seed ‖ previous ‖ status
      signature — signature bytes, reversed from the beacon's byte order
    """

    signed: bytes
    signature: bytes


__all__ = [
    "RawRecord",
    "Record",
    "VerificationPayload",
    "format_hex",
]
