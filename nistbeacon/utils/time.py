# Copyright (c) Animica.
# SPDX-License-Identifier: MIT
"""
nistbeacon.utils.time
=====================

Epoch-seconds helpers shared by the fetcher and the seeded generator.

Lookups accept either an aware/naive :class:`datetime.datetime` or a number of
epoch seconds; records carry UTC-aware datetimes. Naive datetimes are taken
to be UTC.

Conversions go through a fixed UTC epoch plus a :class:`timedelta` so the
``-1`` sentinel (and any other pre-1970 value) converts on every platform.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Union

__all__ = [
    "EPOCH",
    "Clock",
    "TimeLike",
    "system_clock",
    "from_unix",
    "to_unix",
]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# A clock returns the current time as epoch seconds.
Clock = Callable[[], float]

TimeLike = Union[datetime, int, float]


def system_clock() -> float:
    return time.time()


def from_unix(seconds: int) -> datetime:
    """UTC-aware datetime for an integer number of epoch seconds."""
    return EPOCH + timedelta(seconds=int(seconds))


def to_unix(t: TimeLike) -> int:
    """
    Whole epoch seconds for *t*, truncated toward negative infinity.

    Raises TypeError for anything that is not a datetime or a real number.
    """
    if isinstance(t, bool):
        raise TypeError("expected datetime or epoch seconds, got bool")
    if isinstance(t, datetime):
        if t.tzinfo is None:
            t = t.replace(tzinfo=timezone.utc)
        delta = t - EPOCH
        return delta.days * 86400 + delta.seconds
    if isinstance(t, int):
        return t
    if isinstance(t, float):
        return int(t // 1)
    raise TypeError(f"expected datetime or epoch seconds, got {type(t)!r}")
