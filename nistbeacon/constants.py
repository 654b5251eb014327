"""
Beacon client constants.

This module centralizes:
- The public beacon base URL and the record endpoint paths
- Freshness and refresh windows (seconds)
- Fixed widths of the integer fields inside the signed payload
- The sentinel substituted for unparsable numeric fields

Networks or tests may override the operational knobs through
`nistbeacon.config.BeaconConfig`, but code that needs stable defaults can
import from here.
"""

from __future__ import annotations

# -----------------------------
# Remote service
# -----------------------------
DEFAULT_BASE_URL: str = "https://beacon.nist.gov"

# Endpoint paths; the timestamp variants take epoch seconds appended.
PATH_LAST: str = "/rest/record/last"
PATH_CURRENT: str = "/rest/record/"
PATH_PREVIOUS: str = "/rest/record/previous/"
PATH_NEXT: str = "/rest/record/next/"
PATH_START_CHAIN: str = "/rest/record/start-chain/"

# Short endpoint names (used for metric labels and logs)
ENDPOINT_LAST: str = "last"
ENDPOINT_CURRENT: str = "current"
ENDPOINT_PREVIOUS: str = "previous"
ENDPOINT_NEXT: str = "next"
ENDPOINT_START_CHAIN: str = "start-chain"

ENDPOINT_PATHS = {
    ENDPOINT_CURRENT: PATH_CURRENT,
    ENDPOINT_PREVIOUS: PATH_PREVIOUS,
    ENDPOINT_NEXT: PATH_NEXT,
    ENDPOINT_START_CHAIN: PATH_START_CHAIN,
}

# -----------------------------
# Windows (seconds)
# -----------------------------
# A record older than this is not accepted as "current".
DEFAULT_MAX_AGE_S: int = 60

# An auto-updating generator reseeds once its record is older than this.
DEFAULT_REFRESH_INTERVAL_S: int = 60

DEFAULT_TIMEOUT_S: float = 10.0

# -----------------------------
# Wire record
# -----------------------------
# Element names as emitted by the beacon, in document order.
XML_ROOT: str = "record"
XML_FIELDS = (
    ("version", "version"),
    ("frequency", "frequency"),
    ("timeStamp", "timestamp"),
    ("seedValue", "seed_value"),
    ("previousOutputValue", "previous_output_value"),
    ("signatureValue", "signature_value"),
    ("outputValue", "output_value"),
    ("statusCode", "status_code"),
)

# Big-endian widths (bytes) of the integers inside the signed payload.
FREQUENCY_WIDTH: int = 4
TIMESTAMP_WIDTH: int = 8
STATUS_CODE_WIDTH: int = 4

# Substituted for any numeric field that fails to parse.
SENTINEL: int = -1

# -----------------------------
# Seeded generator
# -----------------------------
# The 512-bit seed is shifted down so only its top 64 bits seed the engine.
SEED_SHIFT_BITS: int = 448
SEED_BITS: int = 64

# next_int() yields non-negative integers of this many bits.
INT_BITS: int = 63

USER_AGENT: str = "nistbeacon-python"

__all__ = [
    "DEFAULT_BASE_URL",
    "PATH_LAST",
    "PATH_CURRENT",
    "PATH_PREVIOUS",
    "PATH_NEXT",
    "PATH_START_CHAIN",
    "ENDPOINT_LAST",
    "ENDPOINT_CURRENT",
    "ENDPOINT_PREVIOUS",
    "ENDPOINT_NEXT",
    "ENDPOINT_START_CHAIN",
    "ENDPOINT_PATHS",
    "DEFAULT_MAX_AGE_S",
    "DEFAULT_REFRESH_INTERVAL_S",
    "DEFAULT_TIMEOUT_S",
    "XML_ROOT",
    "XML_FIELDS",
    "FREQUENCY_WIDTH",
    "TIMESTAMP_WIDTH",
    "STATUS_CODE_WIDTH",
    "SENTINEL",
    "SEED_SHIFT_BITS",
    "SEED_BITS",
    "INT_BITS",
    "USER_AGENT",
]
