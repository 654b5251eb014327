"""
nistbeacon.rng
==============

A pseudo-random generator seeded from a verified beacon record.

⚠️  Not a secure random source. The seed is public (anyone can fetch the same
record), which is the point: the sequence is reproducible and verifiable by
third parties. Never derive keys or secrets from it.

Seed derivation
---------------
The record's 512-bit ``seed_value`` is shifted right by 448 bits and the
result truncated to a signed 64-bit integer, i.e. the top 64 bits of the seed
read as two's complement.

Auto update
-----------
A generator built with :meth:`BeaconRand.updated` remembers the timestamp of
its record. On each :meth:`next_int`, once the local clock is past that
timestamp plus ``refresh_interval_s``, it fetches the latest record and
reseeds in place before drawing. A failed refresh raises `RefreshError`
and leaves the generator exactly as it was, so the caller may retry or
carry on with the current seed.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from .client import BeaconClient, default_client
from .constants import INT_BITS, SEED_BITS, SEED_SHIFT_BITS
from .errors import BeaconError, RefreshError
from .types.core import Record
from .utils.time import Clock, system_clock

__all__ = ["BeaconRand", "seed_from_record"]

logger = logging.getLogger(__name__)

_MASK64 = (1 << SEED_BITS) - 1
_SIGN64 = 1 << (SEED_BITS - 1)


def seed_from_record(record: Record) -> int:
    """Signed 64-bit engine seed derived from *record*.seed_value."""
    top = (record.seed_value >> SEED_SHIFT_BITS) & _MASK64
    return top - (1 << SEED_BITS) if top & _SIGN64 else top


class BeaconRand:
    """
    Deterministic generator seeded from a beacon record.

    Not thread-safe; guard shared instances externally.
    """

    def __init__(
        self,
        seed: int,
        *,
        client: Optional[BeaconClient] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._client = client
        self._clock = clock or (client.clock if client is not None else system_clock)
        self._update = False
        self._updated_at: Optional[int] = None
        self._seed = 0
        self._rng = random.Random()
        self._reseed(seed)

    # --- construction

    @classmethod
    def from_record(cls, record: Record) -> "BeaconRand":
        """A generator seeded from *record*; auto update disabled."""
        return cls(seed_from_record(record))

    @classmethod
    def updated(cls, client: Optional[BeaconClient] = None) -> "BeaconRand":
        """
        Seed from the latest record and keep following the beacon.

        Raises whatever `BeaconClient.last()` raises.
        """
        client = client or default_client()
        rec = client.last()
        r = cls(seed_from_record(rec), client=client)
        r._update = True
        r._updated_at = rec.timestamp_unix
        return r

    # --- state

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def auto_update(self) -> bool:
        return self._update

    @property
    def updated_at(self) -> Optional[int]:
        """Timestamp (epoch seconds) of the record last seeded from, if tracked."""
        return self._updated_at

    def _reseed(self, n: int) -> None:
        self._seed = int(n)
        # random.Random drops the sign of int seeds; feed the unsigned 64-bit view.
        self._rng.seed(self._seed & _MASK64)

    def set_seed(self, n: int) -> None:
        """Reseed explicitly. This turns auto update off."""
        self._reseed(n)
        self._update = False

    # --- refresh

    def _refresh_due(self) -> bool:
        if not self._update or self._client is None or self._updated_at is None:
            return False
        return self._clock() > self._updated_at + self._client.config.refresh_interval_s

    def _refresh(self) -> None:
        client = self._client
        try:
            rec = client.last()
        except BeaconError as e:
            client.metrics.record_refresh("failed")
            raise RefreshError(str(e)) from e
        self._reseed(seed_from_record(rec))
        self._updated_at = rec.timestamp_unix
        client.metrics.record_refresh("ok")
        logger.debug("generator reseeded from record timestamp=%s", rec.timestamp_unix)

    # --- draws

    def next_int(self) -> int:
        """
        Next non-negative 63-bit integer.

        Raises:
            RefreshError: auto update was due and the latest record could not
                be fetched; no value is drawn and state is unchanged.
        """
        if self._refresh_due():
            self._refresh()
        return self._rng.getrandbits(INT_BITS)

    def __repr__(self) -> str:
        return (
            f"BeaconRand(seed={self._seed}, auto_update={self._update}, "
            f"updated_at={self._updated_at})"
        )
