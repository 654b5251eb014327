"""
Beacon client errors.

This module defines a small, typed hierarchy of exceptions raised by the
record pipeline (transport → decode → normalize → verify → freshness) and by
the seeded generator. Callers can catch the base `BeaconError` to handle every
failure, or catch the concrete subclasses for more granular control.

No error here is retried by the library; retry policy belongs to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


class BeaconError(Exception):
    """Base class for all beacon client errors."""
    pass


Number = Union[int, float]


@dataclass(eq=False)
class TransportError(BeaconError):
    """
    Raised when the HTTP exchange fails or returns a non-success status.

    Attributes:
        url: The requested URL.
        reason: Human-readable description of the failure.
        status: HTTP status code, if a response was received.
    """
    url: str
    reason: str
    status: Optional[int] = None

    def __str__(self) -> str:
        base = f"TransportError: url={self.url} reason={self.reason}"
        return f"{base} status={self.status}" if self.status is not None else base


@dataclass(eq=False)
class DecodeError(BeaconError):
    """
    Raised when a response body is not a well-formed beacon record document.

    Attributes:
        reason: Parser message or a short tag (e.g., 'unexpected-root').
    """
    reason: str

    def __str__(self) -> str:
        return f"DecodeError: {self.reason}"


@dataclass(eq=False)
class NormalizeError(BeaconError):
    """
    Raised when a field configured as mandatory is absent from a record.

    Malformed values never raise; they degrade to the sentinel instead.
    """
    field: str

    def __str__(self) -> str:
        return f"NormalizeError: required field {self.field!r} is missing"


@dataclass(eq=False)
class VerificationError(BeaconError):
    """
    Raised when the signed payload cannot be rebuilt or the signature is invalid.

    Attributes:
        reason: e.g. 'bad-hex:seed_value', 'bad-int:frequency', 'invalid-signature'.
    """
    reason: str

    def __str__(self) -> str:
        return f"VerificationError: {self.reason}"


@dataclass(eq=False)
class StaleRecordError(BeaconError):
    """
    Raised when a record is older than the accepted freshness window.

    Attributes:
        timestamp: Record timestamp (epoch seconds).
        now: Local clock reading (epoch seconds) at the time of the check.
        max_age_s: The window that was exceeded.
    """
    timestamp: Number
    now: Number
    max_age_s: Number

    def __str__(self) -> str:
        return (
            f"StaleRecordError: age={self.now - self.timestamp}s "
            f"> max_age_s={self.max_age_s} (timestamp={self.timestamp})"
        )


@dataclass(eq=False)
class RefreshError(BeaconError):
    """
    Raised by an auto-updating generator when fetching the latest record fails.

    The generator keeps its previous state; the underlying error is chained
    as ``__cause__``.
    """
    reason: str

    def __str__(self) -> str:
        return f"RefreshError: couldn't update to the last record: {self.reason}"


__all__ = [
    "BeaconError",
    "TransportError",
    "DecodeError",
    "NormalizeError",
    "VerificationError",
    "StaleRecordError",
    "RefreshError",
]
