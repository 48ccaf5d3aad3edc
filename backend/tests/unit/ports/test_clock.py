"""Unit tests for Timestamp arithmetic and the clock implementations."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from token_denylist.services._shared.ports import ManualClock, SystemClock, Timestamp


@pytest.mark.parametrize(
    ("seconds", "minutes"),
    [(0, 0), (59, 0), (60, 1), (119, 1), (3600, 60), (3661, 61)],
)
def test_diff_in_minutes_truncates(seconds, minutes):
    a = Timestamp(1_000_000)
    assert a.add_seconds(seconds).diff_in_minutes(a) == minutes
    # absolute difference
    assert a.diff_in_minutes(a.add_seconds(seconds)) == minutes


def test_datetime_conversions():
    aware = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    ts = Timestamp.from_datetime(aware)
    assert ts.to_datetime() == aware

    # naive values are read as UTC
    assert Timestamp.from_datetime(datetime(2024, 1, 1, 12, 0)) == ts

    # other offsets normalize to the same instant
    plus_two = aware.astimezone(timezone(timedelta(hours=2)))
    assert Timestamp.from_datetime(plus_two) == ts


def test_from_epoch_accepts_claim_shapes():
    assert Timestamp.from_epoch(1_700_000_000) == Timestamp(1_700_000_000)
    assert Timestamp.from_epoch("1700000000") == Timestamp(1_700_000_000)
    assert Timestamp.from_epoch(1_700_000_000.9) == Timestamp(1_700_000_000)


def test_ordering():
    a = Timestamp(10)
    assert a < a.add_seconds(1)
    assert a.add_seconds(-1) < a
    assert max(a, a.add_seconds(5)) == Timestamp(15)


def test_manual_clock_moves_only_when_told():
    clock = ManualClock(Timestamp(100))
    assert clock.now() == Timestamp(100)
    assert clock.advance(50) == Timestamp(150)
    clock.set(Timestamp(10))
    assert clock.now() == Timestamp(10)


def test_manual_clock_predicates():
    clock = ManualClock(Timestamp(100))
    assert clock.is_past(Timestamp(99)) is True
    assert clock.is_future(Timestamp(101)) is True
    # "now" is neither past nor future
    assert clock.is_past(Timestamp(100)) is False
    assert clock.is_future(Timestamp(100)) is False


def test_system_clock_tracks_wall_time():
    clock = SystemClock()
    before = int(datetime.now(UTC).timestamp())
    now = clock.now()
    after = int(datetime.now(UTC).timestamp())
    assert before <= now.epoch <= after
    assert clock.is_past(now.add_seconds(-60)) is True
    assert clock.is_future(now.add_seconds(60)) is True
