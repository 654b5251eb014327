"""
Test support: a stand-in beacon.

- Self-signed RSA certificates standing in for the beacon's signing certificate
- `signed_fields` signs synthetic records exactly as the beacon does
  (RSA/SHA-512 over the fixed payload, signature bytes reversed, upper hex)
- `FakeBeacon` serves canned responses through httpx.MockTransport and records
  every request path
- `FakeClock` is a settable epoch-seconds clock
"""
from __future__ import annotations

import datetime as dt
import hashlib
import random
import struct
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import httpx
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.x509.oid import NameOID

BASE_URL = "https://beacon.test"
NOW = 1_447_873_080
NS = "http://beacon.nist.gov/record/0.1/"


def self_signed(key: rsa.RSAPrivateKey, cn: str) -> x509.Certificate:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, cn)])
    start = dt.datetime(2015, 1, 1, tzinfo=dt.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(start)
        .not_valid_after(start + dt.timedelta(days=365))
        .sign(key, hashes.SHA256())
    )


def signed_fields(
    key: rsa.RSAPrivateKey,
    *,
    timestamp: int = NOW - 20,
    version: str = "Version 1.0",
    frequency: int = 60,
    status_code: int = 0,
    seed: Optional[bytes] = None,
    previous: Optional[bytes] = None,
) -> Dict[str, str]:
    """Field values of a correctly signed record, keyed by XML element name."""
    rnd = random.Random(timestamp)
    seed = seed if seed is not None else rnd.randbytes(64)
    previous = previous if previous is not None else rnd.randbytes(64)
    signed = (
        version.encode("utf-8")
        + struct.pack(">i", frequency)
        + struct.pack(">q", timestamp)
        + seed
        + previous
        + struct.pack(">i", status_code)
    )
    sig = key.sign(signed, padding.PKCS1v15(), hashes.SHA512())
    return {
        "version": version,
        "frequency": str(frequency),
        "timeStamp": str(timestamp),
        "seedValue": seed.hex().upper(),
        "previousOutputValue": previous.hex().upper(),
        "signatureValue": sig[::-1].hex().upper(),
        "outputValue": hashlib.sha512(sig).hexdigest().upper(),
        "statusCode": str(status_code),
    }


def record_xml(fields: Dict[str, str], *, namespace: Optional[str] = NS) -> bytes:
    xmlns = f' xmlns="{namespace}"' if namespace else ""
    body = "".join(f"<{k}>{v}</{k}>" for k, v in fields.items())
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f"<record{xmlns}>{body}</record>"
    ).encode("utf-8")


@dataclass
class FakeClock:
    now: float = float(NOW)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class FakeBeacon:
    """Serves canned responses by URL path; unknown paths get 404."""

    routes: Dict[str, Tuple[int, bytes]] = field(default_factory=dict)
    requests: List[str] = field(default_factory=list)
    fail_with: Optional[Exception] = None

    def serve(self, path: str, body: bytes, status: int = 200) -> None:
        self.routes[path] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url.path)
        if self.fail_with is not None:
            raise self.fail_with
        status, body = self.routes.get(request.url.path, (404, b"<error>not found</error>"))
        return httpx.Response(status, content=body, headers={"Content-Type": "application/xml"})
