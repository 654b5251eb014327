import time
from datetime import datetime, timezone

import pytest

from nistbeacon.errors import RefreshError, StaleRecordError, TransportError
from nistbeacon.rng import BeaconRand, seed_from_record
from nistbeacon.types.core import Record
from nistbeacon.wire.decode import decode_record
from nistbeacon.wire.normalize import normalize

from .support import NOW, record_xml


def _record(seed_value: int) -> Record:
    return Record(
        version="Version 1.0",
        frequency=60,
        timestamp=datetime(2015, 11, 18, 18, 57, tzinfo=timezone.utc),
        seed_value=seed_value,
        previous_output_value=0,
        signature_value=0,
        output_value=0,
    )


# ---------- seed derivation ----------


def test_seed_keeps_top_64_bits_of_512():
    low = (1 << 448) - 1  # all ones below the cut: discarded
    rec = _record((0x0123456789ABCDEF << 448) | low)
    assert seed_from_record(rec) == 0x0123456789ABCDEF


def test_seed_is_signed_64_bit():
    assert seed_from_record(_record(0xFFFFFFFFFFFFFFFF << 448)) == -1
    assert seed_from_record(_record(0x8000000000000000 << 448)) == -(1 << 63)
    assert seed_from_record(_record(0x7FFFFFFFFFFFFFFF << 448)) == (1 << 63) - 1


def test_seed_of_sentinel_and_short_values():
    assert seed_from_record(_record(-1)) == -1
    assert seed_from_record(_record(0xFF)) == 0


# ---------- determinism ----------


def test_same_record_same_sequence(make_fields):
    rec = normalize(decode_record(record_xml(make_fields())))
    a = BeaconRand.from_record(rec)
    b = BeaconRand.from_record(rec)
    assert [a.next_int() for _ in range(50)] == [b.next_int() for _ in range(50)]
    assert a.seed == seed_from_record(rec)
    assert not a.auto_update
    assert a.updated_at is None


def test_sign_of_seed_matters():
    pos, neg = BeaconRand(5), BeaconRand(-5)
    assert [pos.next_int() for _ in range(5)] != [neg.next_int() for _ in range(5)]


def test_next_int_range():
    r = BeaconRand(42)
    for _ in range(1000):
        v = r.next_int()
        assert 0 <= v < (1 << 63)


def test_set_seed_restarts_sequence():
    r = BeaconRand(7)
    first = [r.next_int() for _ in range(3)]
    r.set_seed(7)
    assert [r.next_int() for _ in range(3)] == first


# ---------- auto update ----------


def test_updated_seeds_from_latest(client, beacon, make_xml):
    beacon.serve("/rest/record/last", make_xml(timestamp=NOW - 10))
    r = BeaconRand.updated(client)
    assert r.auto_update
    assert r.updated_at == NOW - 10
    assert beacon.requests == ["/rest/record/last"]


def test_updated_propagates_fetch_errors(client, beacon, make_xml):
    beacon.serve("/rest/record/last", make_xml(timestamp=NOW - 600))
    with pytest.raises(StaleRecordError):
        BeaconRand.updated(client)


def test_no_refresh_inside_the_window(client, beacon, make_xml, clock):
    beacon.serve("/rest/record/last", make_xml(timestamp=NOW - 10))
    r = BeaconRand.updated(client)
    clock.advance(50)  # exactly at updated_at + 60: not past it
    for _ in range(5):
        r.next_int()
    assert len(beacon.requests) == 1


def test_exactly_one_refresh_after_the_window(client, beacon, make_xml, clock, registry):
    beacon.serve("/rest/record/last", make_xml(timestamp=NOW - 10))
    r = BeaconRand.updated(client)
    old_seed = r.seed

    clock.advance(51)
    beacon.serve("/rest/record/last", make_xml(timestamp=NOW + 45))
    r.next_int()

    assert len(beacon.requests) == 2
    assert r.updated_at == NOW + 45
    assert r.seed != old_seed
    assert r.auto_update

    clock.advance(30)
    for _ in range(10):
        r.next_int()
    assert len(beacon.requests) == 2
    assert registry.get_sample_value("nistbeacon_client_refreshes_total", {"outcome": "ok"}) == 1


def test_refreshed_generator_matches_fresh_seed(client, beacon, make_xml, clock):
    beacon.serve("/rest/record/last", make_xml(timestamp=NOW - 10))
    r = BeaconRand.updated(client)

    clock.advance(120)
    newer = make_xml(timestamp=NOW + 100)
    beacon.serve("/rest/record/last", newer)
    got = [r.next_int() for _ in range(5)]

    expected = BeaconRand.from_record(normalize(decode_record(newer)))
    assert got == [expected.next_int() for _ in range(5)]


def test_refresh_failure_is_recoverable(client, beacon, make_xml, clock, registry):
    beacon.serve("/rest/record/last", make_xml(timestamp=NOW - 10))
    r = BeaconRand.updated(client)
    seed, updated_at = r.seed, r.updated_at

    clock.advance(120)
    beacon.serve("/rest/record/last", b"unavailable", status=503)
    with pytest.raises(RefreshError) as ei:
        r.next_int()
    assert isinstance(ei.value.__cause__, TransportError)
    assert (r.seed, r.updated_at, r.auto_update) == (seed, updated_at, True)
    assert registry.get_sample_value("nistbeacon_client_refreshes_total", {"outcome": "failed"}) == 1

    # the beacon comes back: the next draw refreshes
    beacon.serve("/rest/record/last", make_xml(timestamp=NOW + 110))
    r.next_int()
    assert r.updated_at == NOW + 110


def test_set_seed_turns_auto_update_off(client, beacon, make_xml, clock):
    beacon.serve("/rest/record/last", make_xml(timestamp=NOW - 10))
    r = BeaconRand.updated(client)
    r.set_seed(99)
    clock.advance(3600)
    r.next_int()
    assert not r.auto_update
    assert len(beacon.requests) == 1


def test_updated_without_client_uses_the_default_wiring(default_wiring, beacon, make_xml):
    fresh = int(time.time()) - 5
    xml = make_xml(timestamp=fresh)
    beacon.serve("/rest/record/last", xml)
    r = BeaconRand.updated()
    assert r.auto_update
    assert r.updated_at == fresh
    assert r.seed == seed_from_record(normalize(decode_record(xml)))
    assert beacon.requests == ["/rest/record/last"]
