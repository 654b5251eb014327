"""
nistbeacon.verify.signature
===========================

Signature verifier for beacon records.

The beacon signs the concatenation::

    version (UTF-8)
    ‖ frequency    (4-byte big-endian)
    ‖ timeStamp    (8-byte big-endian)
    ‖ seedValue    (raw bytes)
    ‖ previousOutputValue (raw bytes)
    ‖ statusCode   (4-byte big-endian)

with RSA / SHA-512 (PKCS#1 v1.5), and publishes the signature with its byte
order reversed. The payload is rebuilt from the *raw* strings of the record,
not from normalized values, so sentinel substitution can never make a corrupt
record verify.
"""

from __future__ import annotations

import logging
import re
from time import perf_counter
from typing import Optional

from ..constants import FREQUENCY_WIDTH, STATUS_CODE_WIDTH, TIMESTAMP_WIDTH
from ..errors import VerificationError
from ..metrics import METRICS, Metrics
from ..types.core import RawRecord, VerificationPayload
from ..utils.bytes import be_int, from_hex, reverse_bytes
from .anchor import SignatureChecker

__all__ = ["build_payload", "verify_record"]

logger = logging.getLogger(__name__)

_DEC_RE = re.compile(r"[+-]?[0-9]+")


def _hex_field(raw: RawRecord, name: str) -> bytes:
    try:
        return from_hex(getattr(raw, name))
    except ValueError as e:
        raise VerificationError(f"bad-hex:{name}") from e


def _int_field(raw: RawRecord, name: str, width: int) -> bytes:
    text = getattr(raw, name)
    if not _DEC_RE.fullmatch(text):
        raise VerificationError(f"bad-int:{name}")
    try:
        return be_int(int(text, 10), width)
    except OverflowError as e:
        raise VerificationError(f"int-overflow:{name}") from e


def build_payload(raw: RawRecord) -> VerificationPayload:
    """
    Rebuild the signed bytes and the verifier-order signature for *raw*.

    Raises:
        VerificationError: a hex field does not decode or an integer field
            does not parse / fit its width.
    """
    signature = reverse_bytes(_hex_field(raw, "signature_value"))

    signed = b"".join(
        (
            raw.version.encode("utf-8"),
            _int_field(raw, "frequency", FREQUENCY_WIDTH),
            _int_field(raw, "timestamp", TIMESTAMP_WIDTH),
            _hex_field(raw, "seed_value"),
            _hex_field(raw, "previous_output_value"),
            _int_field(raw, "status_code", STATUS_CODE_WIDTH),
        )
    )
    return VerificationPayload(signed=signed, signature=signature)


def verify_record(
    raw: RawRecord,
    anchor: SignatureChecker,
    *,
    metrics: Optional[Metrics] = None,
) -> VerificationPayload:
    """
    Check the signature of *raw* against *anchor*.

    Returns the payload that was verified.

    Raises:
        VerificationError: the payload cannot be rebuilt or the signature is invalid.
    """
    m = metrics or METRICS
    payload = build_payload(raw)

    start = perf_counter()
    try:
        ok = anchor.verify(payload.signed, payload.signature)
    finally:
        m.observe_verify(perf_counter() - start)

    if not ok:
        logger.warning(
            "beacon signature rejected (timestamp=%s version=%r)",
            raw.timestamp,
            raw.version,
        )
        raise VerificationError("invalid-signature")
    return payload
