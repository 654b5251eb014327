"""
Shared pytest fixtures:
- Throw-away RSA keys and the TrustAnchor built from them
- Record factories signing synthetic records the way the beacon does
- A fake beacon behind httpx.MockTransport, a settable clock, an isolated
  Prometheus registry, and a BeaconClient wired to all of them
"""
from __future__ import annotations

from typing import Callable, Dict

import httpx
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from prometheus_client import CollectorRegistry

from nistbeacon import client as client_mod
from nistbeacon.client import BeaconClient
from nistbeacon.config import BeaconConfig
from nistbeacon.metrics import Metrics
from nistbeacon.transport import HttpxTransport, set_default_transport
from nistbeacon.verify.anchor import TrustAnchor

from .support import BASE_URL, FakeBeacon, FakeClock, record_xml, self_signed, signed_fields


# ---------- keys & anchor ----------


@pytest.fixture(scope="session")
def signing_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def anchor(signing_key) -> TrustAnchor:
    return TrustAnchor(self_signed(signing_key, "beacon.test"))


@pytest.fixture(scope="session")
def wrong_anchor(other_key) -> TrustAnchor:
    return TrustAnchor(self_signed(other_key, "impostor.test"))


# ---------- record factories ----------


@pytest.fixture
def make_fields(signing_key) -> Callable[..., Dict[str, str]]:
    def _make(**kw) -> Dict[str, str]:
        return signed_fields(signing_key, **kw)

    return _make


@pytest.fixture
def make_xml(make_fields) -> Callable[..., bytes]:
    def _make(**kw) -> bytes:
        return record_xml(make_fields(**kw))

    return _make


# ---------- wiring ----------


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def beacon() -> FakeBeacon:
    return FakeBeacon()


@pytest.fixture
def transport(beacon):
    http = httpx.Client(transport=httpx.MockTransport(beacon.handler))
    yield HttpxTransport(client=http)
    http.close()


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def metrics(registry) -> Metrics:
    return Metrics(registry=registry)


@pytest.fixture
def client(transport, anchor, clock, metrics) -> BeaconClient:
    return BeaconClient(
        BeaconConfig(base_url=BASE_URL),
        transport=transport,
        anchor=anchor,
        clock=clock,
        metrics=metrics,
    )


@pytest.fixture
def default_wiring(monkeypatch, transport, anchor):
    """Route the module-level lookups (no explicit client) to the fake beacon."""
    monkeypatch.setattr(client_mod, "default_anchor", lambda: anchor)
    monkeypatch.setattr(client_mod, "BeaconConfig", lambda: BeaconConfig(base_url=BASE_URL))
    set_default_transport(transport)
    yield transport
    set_default_transport(None)
