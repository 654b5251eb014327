"""
nistbeacon.client
=================

Record fetcher: the single path every lookup goes through.

    GET url ─▶ decode ─▶ normalize ─▶ verify signature ─▶ freshness ─▶ Record

Each stage raises its own error type (see :mod:`nistbeacon.errors`); nothing
is retried and no unverified record is ever returned.

Freshness policy
----------------
`last()` rejects a record older than ``max_age_s`` (60 s by default). The
timestamp lookups (`current`, `previous`, `next`, `start_chain`) return
historical records and are not age-checked unless
``BeaconConfig.check_historical_staleness`` is set. Every lookup takes
``check_staleness=`` to override the default for one call.

Usage
-----
    from nistbeacon import BeaconClient

    with BeaconClient() as beacon:
        rec = beacon.last()
        day_ago = beacon.previous(rec.timestamp_unix - 86400)

    # or, through the process-wide default client:
    from nistbeacon import last_record
    rec = last_record()
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import BeaconConfig
from .constants import (
    ENDPOINT_CURRENT,
    ENDPOINT_LAST,
    ENDPOINT_NEXT,
    ENDPOINT_PATHS,
    ENDPOINT_PREVIOUS,
    ENDPOINT_START_CHAIN,
    PATH_LAST,
)
from .errors import (
    DecodeError,
    NormalizeError,
    StaleRecordError,
    TransportError,
    VerificationError,
)
from .metrics import METRICS, Metrics
from .transport import HttpxTransport, Transport, default_transport
from .types.core import Record
from .utils.time import Clock, TimeLike, system_clock, to_unix
from .verify.anchor import SignatureChecker, default_anchor
from .verify.signature import verify_record
from .wire.decode import decode_record
from .wire.normalize import normalize

__all__ = [
    "BeaconClient",
    "record_url",
    "default_client",
    "last_record",
    "current_record",
    "previous_record",
    "next_record",
    "start_chain_record",
]

logger = logging.getLogger(__name__)


def record_url(base_url: str, endpoint: str, t: Optional[TimeLike] = None) -> str:
    """
    URL for *endpoint* ('last', 'current', 'previous', 'next', 'start-chain').

    Every endpoint except 'last' requires a timestamp, sent as epoch seconds.
    """
    base = base_url.rstrip("/")
    if endpoint == ENDPOINT_LAST:
        return base + PATH_LAST
    try:
        path = ENDPOINT_PATHS[endpoint]
    except KeyError:
        raise ValueError(f"unknown endpoint: {endpoint!r}") from None
    if t is None:
        raise ValueError(f"endpoint {endpoint!r} requires a timestamp")
    return f"{base}{path}{to_unix(t)}"


class BeaconClient:
    """
    Fetches and verifies beacon records.

    Args:
        config: Remote/freshness settings; defaults to `BeaconConfig()`.
        transport: HTTP capability. When omitted the client owns an
            `HttpxTransport` built from *config* and closes it on `close()`.
        anchor: Signature checker; defaults to the embedded beacon certificate.
        clock: Returns "now" as epoch seconds; used by the freshness check.
        metrics: Prometheus instruments; defaults to the module singleton.
    """

    def __init__(
        self,
        config: Optional[BeaconConfig] = None,
        *,
        transport: Optional[Transport] = None,
        anchor: Optional[SignatureChecker] = None,
        clock: Clock = system_clock,
        metrics: Optional[Metrics] = None,
    ) -> None:
        self.config = config or BeaconConfig()
        self.config.validate()
        self._own_transport = transport is None
        self.transport: Transport = transport or HttpxTransport(
            timeout=self.config.timeout_s, user_agent=self.config.user_agent
        )
        self.anchor: SignatureChecker = anchor or default_anchor()
        self.clock = clock
        self.metrics = metrics or METRICS

    # --- context management

    def close(self) -> None:
        if self._own_transport and isinstance(self.transport, HttpxTransport):
            self.transport.close()

    def __enter__(self) -> "BeaconClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --- pipeline

    def fetch(
        self, url: str, *, check_staleness: bool = True, endpoint: str = "other"
    ) -> Record:
        """
        Retrieve, decode, normalize, verify and (optionally) age-check the
        record at *url*.

        Raises:
            TransportError, DecodeError, NormalizeError, VerificationError,
            StaleRecordError.
        """
        try:
            record = self._fetch(url, check_staleness)
        except TransportError:
            self.metrics.record_fetch(endpoint, "transport")
            raise
        except DecodeError:
            self.metrics.record_fetch(endpoint, "decode")
            raise
        except NormalizeError:
            self.metrics.record_fetch(endpoint, "normalize")
            raise
        except VerificationError:
            self.metrics.record_fetch(endpoint, "verify")
            raise
        except StaleRecordError:
            self.metrics.record_fetch(endpoint, "stale")
            raise
        self.metrics.record_fetch(endpoint, "ok")
        return record

    def _fetch(self, url: str, check_staleness: bool) -> Record:
        resp = self.transport.get(url)
        if not resp.ok:
            raise TransportError(url, "unexpected HTTP status", status=resp.status)

        raw = decode_record(resp.body)
        record = normalize(raw, required=self.config.required_fields)

        verify_record(raw, self.anchor, metrics=self.metrics)

        if check_staleness:
            now = self.clock()
            ts = record.timestamp_unix
            if now - ts > self.config.max_age_s:
                logger.warning(
                    "stale beacon record: timestamp=%s now=%.0f max_age_s=%s",
                    ts,
                    now,
                    self.config.max_age_s,
                )
                raise StaleRecordError(ts, now, self.config.max_age_s)

        logger.debug("verified beacon record timestamp=%s url=%s", record.timestamp_unix, url)
        return record

    def _lookup(
        self, endpoint: str, t: Optional[TimeLike], check_staleness: Optional[bool]
    ) -> Record:
        if check_staleness is None:
            check_staleness = (
                endpoint == ENDPOINT_LAST or self.config.check_historical_staleness
            )
        url = record_url(self.config.base_url, endpoint, t)
        return self.fetch(url, check_staleness=check_staleness, endpoint=endpoint)

    # --- public lookups

    def last(self, *, check_staleness: Optional[bool] = None) -> Record:
        """The most recent record."""
        return self._lookup(ENDPOINT_LAST, None, check_staleness)

    def current(self, t: TimeLike, *, check_staleness: Optional[bool] = None) -> Record:
        """The record closest to *t*."""
        return self._lookup(ENDPOINT_CURRENT, t, check_staleness)

    def previous(self, t: TimeLike, *, check_staleness: Optional[bool] = None) -> Record:
        """The record immediately before *t*."""
        return self._lookup(ENDPOINT_PREVIOUS, t, check_staleness)

    def next(self, t: TimeLike, *, check_staleness: Optional[bool] = None) -> Record:
        """The record immediately after *t*."""
        return self._lookup(ENDPOINT_NEXT, t, check_staleness)

    def start_chain(self, t: TimeLike, *, check_staleness: Optional[bool] = None) -> Record:
        """The start-of-chain record covering *t*."""
        return self._lookup(ENDPOINT_START_CHAIN, t, check_staleness)


# -------------------------
# Module-level convenience
# -------------------------


def default_client() -> BeaconClient:
    """
    A client bound to the current default transport (see
    `nistbeacon.transport.set_default_transport`) and default config.
    Built per call, so a transport swap takes effect on the next lookup.
    """
    return BeaconClient(transport=default_transport())


def last_record() -> Record:
    return default_client().last()


def current_record(t: TimeLike) -> Record:
    return default_client().current(t)


def previous_record(t: TimeLike) -> Record:
    return default_client().previous(t)


def next_record(t: TimeLike) -> Record:
    return default_client().next(t)


def start_chain_record(t: TimeLike) -> Record:
    return default_client().start_chain(t)
