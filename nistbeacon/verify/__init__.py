"""
nistbeacon.verify
=================

Authenticity checks for beacon records:

- :mod:`anchor`    — embedded signing certificate (TrustAnchor)
- :mod:`signature` — payload reconstruction and RSA/SHA-512 validation
"""

from __future__ import annotations

from .anchor import BEACON_CERT_PEM, SignatureChecker, TrustAnchor, default_anchor
from .signature import build_payload, verify_record

__all__ = [
    "BEACON_CERT_PEM",
    "SignatureChecker",
    "TrustAnchor",
    "default_anchor",
    "build_payload",
    "verify_record",
]
