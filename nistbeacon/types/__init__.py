"""
Beacon client — types package

Typed primitives shared by the decoder, normalizer, verifier and fetcher:

  • core — RawRecord, Record, VerificationPayload

Re-exported here for convenience:
    from nistbeacon.types import Record, RawRecord
"""

from __future__ import annotations

from .core import RawRecord, Record, VerificationPayload, format_hex

__all__ = [
    "RawRecord",
    "Record",
    "VerificationPayload",
    "format_hex",
]
