"""
nistbeacon — verified records from the NIST Randomness Beacon.

This package fetches the beacon's signed, timestamped records over HTTP,
checks each one against the beacon's embedded signing certificate and a
freshness window, and can seed a reproducible (not secret!) pseudo-random
generator from a verified record.

    from nistbeacon import BeaconClient, BeaconRand

    with BeaconClient() as beacon:
        rec = beacon.last()
        rng = BeaconRand.from_record(rec)
        rng.next_int()

Only light, stable exports are surfaced here.
"""

from __future__ import annotations

from .client import (
    BeaconClient,
    current_record,
    last_record,
    next_record,
    previous_record,
    record_url,
    start_chain_record,
)
from .config import BeaconConfig
from .errors import (
    BeaconError,
    DecodeError,
    NormalizeError,
    RefreshError,
    StaleRecordError,
    TransportError,
    VerificationError,
)
from .rng import BeaconRand, seed_from_record
from .transport import HttpxTransport, Response, Transport, set_default_transport
from .types.core import Record
from .verify.anchor import TrustAnchor
from .version import __version__

__all__ = [
    "__version__",
    "BeaconClient",
    "BeaconConfig",
    "BeaconRand",
    "Record",
    "TrustAnchor",
    "Transport",
    "HttpxTransport",
    "Response",
    "set_default_transport",
    "record_url",
    "last_record",
    "current_record",
    "previous_record",
    "next_record",
    "start_chain_record",
    "seed_from_record",
    "BeaconError",
    "TransportError",
    "DecodeError",
    "NormalizeError",
    "VerificationError",
    "StaleRecordError",
    "RefreshError",
]
