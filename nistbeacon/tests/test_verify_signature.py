import struct

import pytest
from prometheus_client import CollectorRegistry

from nistbeacon.errors import VerificationError
from nistbeacon.metrics import Metrics
from nistbeacon.types.core import RawRecord
from nistbeacon.verify.anchor import BEACON_CERT_PEM, TrustAnchor, default_anchor
from nistbeacon.verify.signature import build_payload, verify_record
from nistbeacon.wire.decode import decode_record

from .support import record_xml


def _raw(fields) -> RawRecord:
    return decode_record(record_xml(fields))


def test_payload_layout_matches_beacon(make_fields):
    fields = make_fields(timestamp=1447873020, frequency=60, status_code=2)
    payload = build_payload(_raw(fields))

    expected = (
        b"Version 1.0"
        + bytes.fromhex("0000003c")
        + struct.pack(">q", 1447873020)
        + bytes.fromhex(fields["seedValue"])
        + bytes.fromhex(fields["previousOutputValue"])
        + bytes.fromhex("00000002")
    )
    assert payload.signed == expected
    assert len(payload.signed) == len(b"Version 1.0") + 4 + 8 + 64 + 64 + 4
    # signature handed to the verifier is the published one, byte-reversed
    assert payload.signature == bytes.fromhex(fields["signatureValue"])[::-1]


def test_valid_signature_verifies(make_fields, anchor):
    verify_record(_raw(make_fields()), anchor, metrics=Metrics(registry=CollectorRegistry()))


def test_verification_records_latency(make_fields, anchor):
    reg = CollectorRegistry()
    verify_record(_raw(make_fields()), anchor, metrics=Metrics(registry=reg))
    assert reg.get_sample_value("nistbeacon_client_verify_seconds_count") == 1.0


def test_unreversed_signature_is_rejected(make_fields, anchor):
    fields = make_fields()
    fields["signatureValue"] = bytes.fromhex(fields["signatureValue"])[::-1].hex().upper()
    with pytest.raises(VerificationError) as ei:
        verify_record(_raw(fields), anchor)
    assert ei.value.reason == "invalid-signature"


def test_wrong_certificate_is_rejected(make_fields, wrong_anchor):
    with pytest.raises(VerificationError):
        verify_record(_raw(make_fields()), wrong_anchor)


@pytest.mark.parametrize(
    "element,value",
    [
        ("version", "Version 1.1"),
        ("frequency", "61"),
        ("timeStamp", "1447873021"),
        ("statusCode", "1"),
    ],
)
def test_tampered_field_is_rejected(make_fields, anchor, element, value):
    fields = make_fields()
    fields[element] = value
    with pytest.raises(VerificationError):
        verify_record(_raw(fields), anchor)


def test_tampered_seed_is_rejected(make_fields, anchor):
    fields = make_fields()
    seed = bytearray(bytes.fromhex(fields["seedValue"]))
    seed[0] ^= 0x01
    fields["seedValue"] = seed.hex().upper()
    with pytest.raises(VerificationError):
        verify_record(_raw(fields), anchor)


@pytest.mark.parametrize(
    "element,value,reason",
    [
        ("signatureValue", "XYZ", "bad-hex:signature_value"),
        ("seedValue", "ABC", "bad-hex:seed_value"),
        ("previousOutputValue", "0xAB", "bad-hex:previous_output_value"),
        ("frequency", "sixty", "bad-int:frequency"),
        ("timeStamp", "", "bad-int:timestamp"),
        ("statusCode", str(1 << 40), "int-overflow:status_code"),
    ],
)
def test_unrebuildable_payload_is_a_verification_error(make_fields, anchor, element, value, reason):
    fields = make_fields()
    fields[element] = value
    with pytest.raises(VerificationError) as ei:
        verify_record(_raw(fields), anchor)
    assert ei.value.reason == reason


def test_embedded_certificate_parses_once():
    a = default_anchor()
    assert a is default_anchor()
    assert "beacon.nist.gov" in a.subject
    assert a.public_key.key_size == 2048


def test_from_pem_rejects_trailing_garbage_and_multiple_certs():
    with pytest.raises(ValueError):
        TrustAnchor.from_pem(BEACON_CERT_PEM + b"garbage")
    with pytest.raises(ValueError):
        TrustAnchor.from_pem(BEACON_CERT_PEM + BEACON_CERT_PEM)
