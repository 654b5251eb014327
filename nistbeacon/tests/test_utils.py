from datetime import datetime, timedelta, timezone

import pytest

from nistbeacon.utils.bytes import as_bytes, be_int, from_hex, reverse_bytes
from nistbeacon.utils.time import EPOCH, from_unix, to_unix


@pytest.mark.parametrize("bad", ["0x00", "ab c", "abc", "zz", "ab\n"])
def test_from_hex_is_strict(bad):
    with pytest.raises(ValueError):
        from_hex(bad)


def test_from_hex_accepts_both_cases_and_empty():
    assert from_hex("00Ff") == b"\x00\xff"
    assert from_hex("") == b""


def test_reverse_and_as_bytes():
    assert reverse_bytes(bytearray(b"\x01\x02\x03")) == b"\x03\x02\x01"
    assert as_bytes(memoryview(b"ab")) == b"ab"
    with pytest.raises(TypeError):
        as_bytes("ab")


def test_be_int_widths_and_sign():
    assert be_int(60, 4) == b"\x00\x00\x00\x3c"
    assert be_int(-1, 4) == b"\xff\xff\xff\xff"
    assert be_int(1447873020, 8) == (1447873020).to_bytes(8, "big")
    with pytest.raises(OverflowError):
        be_int(1 << 31, 4)


def test_unix_conversions():
    assert from_unix(0) == EPOCH
    assert to_unix(from_unix(1447873080)) == 1447873080
    naive = datetime(2015, 11, 18, 18, 58)
    assert to_unix(naive) == 1447873080
    plus_one = datetime(2015, 11, 18, 19, 58, tzinfo=timezone(timedelta(hours=1)))
    assert to_unix(plus_one) == 1447873080
    assert to_unix(12.9) == 12
    with pytest.raises(TypeError):
        to_unix(True)
