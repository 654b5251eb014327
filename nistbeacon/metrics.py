"""
Prometheus metrics for the beacon client.

This module defines counters and histograms for the record pipeline:
  • fetches   — record lookups per endpoint and outcome
  • verify_seconds — time spent in the RSA/SHA-512 signature check
  • refreshes — auto-update reseeds of the seeded generator per outcome

Design notes
------------
- Label cardinality is small and finite: five endpoints, six fetch outcomes,
  two refresh outcomes. URLs and timestamps are never used as labels.

Usage
-----
    from nistbeacon.metrics import METRICS

    METRICS.record_fetch("last", "ok")
    METRICS.observe_verify(0.002)
    METRICS.record_refresh("failed")

If you need a custom Prometheus registry or different namespace/subsystem, construct
your own `Metrics` instance and pass it to `BeaconClient(metrics=...)`.
"""

from __future__ import annotations

from typing import Iterable

from prometheus_client import REGISTRY, Counter, Histogram

# --------- Vocabularies (kept small for bounded cardinality) ---------

_ENDPOINTS = (
    "last",
    "current",
    "previous",
    "next",
    "start-chain",
    "other",        # fetch() called with an arbitrary URL
)

_FETCH_OUTCOMES = (
    "ok",           # verified (and fresh, where checked)
    "transport",    # HTTP failure or non-2xx status
    "decode",       # body is not a record document
    "normalize",    # mandatory field missing
    "verify",       # payload rebuild or signature check failed
    "stale",        # older than the freshness window
)

_REFRESH_OUTCOMES = (
    "ok",
    "failed",
)

# Signature check latency buckets (seconds): RSA-2048 verify is sub-millisecond
_VERIFY_BUCKETS = (
    0.0001, 0.00025, 0.0005,
    0.001, 0.0025, 0.005,
    0.01, 0.025, 0.1,
)


class Metrics:
    """
    Container for all beacon client Prometheus instruments.

    Args:
        namespace: Prometheus metric namespace (prefix).
        subsystem: Prometheus metric subsystem (inserted between namespace and name).
        registry:  Prometheus registry to register the metrics with.
    """

    def __init__(
        self,
        *,
        namespace: str = "nistbeacon",
        subsystem: str = "client",
        registry=REGISTRY,
        verify_buckets: Iterable[float] = _VERIFY_BUCKETS,
    ) -> None:
        self.fetches_total = Counter(
            "fetches_total",
            "Number of beacon record lookups, labeled by endpoint and outcome.",
            labelnames=("endpoint", "outcome"),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.refreshes_total = Counter(
            "refreshes_total",
            "Number of generator auto-update reseeds, labeled by outcome.",
            labelnames=("outcome",),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.verify_seconds = Histogram(
            "verify_seconds",
            "Time spent verifying record signatures (seconds).",
            buckets=tuple(verify_buckets),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )

    # ----- Recording helpers -------------------------------------------------

    def record_fetch(self, endpoint: str, outcome: str) -> None:
        """Increment the fetch counter; unknown labels fold into 'other' / 'transport'."""
        if endpoint not in _ENDPOINTS:
            endpoint = "other"
        if outcome not in _FETCH_OUTCOMES:
            outcome = "transport"
        self.fetches_total.labels(endpoint=endpoint, outcome=outcome).inc()

    def record_refresh(self, outcome: str) -> None:
        if outcome not in _REFRESH_OUTCOMES:
            outcome = "failed"
        self.refreshes_total.labels(outcome=outcome).inc()

    def observe_verify(self, seconds: float) -> None:
        """Record a signature verification duration in seconds."""
        self.verify_seconds.observe(float(seconds))


# Singleton used by most components
METRICS = Metrics()

__all__ = [
    "Metrics",
    "METRICS",
    "_ENDPOINTS",
    "_FETCH_OUTCOMES",
    "_REFRESH_OUTCOMES",
]
