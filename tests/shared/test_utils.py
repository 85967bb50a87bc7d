"""Tests for shared helpers"""

from datetime import UTC, date, datetime, timedelta

import pytest

from guardpost.shared.utils import day_bounds, ensure_utc, generate_cuid, is_mobile_user_agent


@pytest.mark.parametrize(
    "user_agent,expected",
    [
        ("Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) Mobile/15E148", True),
        ("Mozilla/5.0 (Linux; Android 14; Pixel 8)", True),
        ("Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0", False),
        ("", False),
        (None, False),
    ],
)
def test_is_mobile_user_agent(user_agent, expected):
    assert is_mobile_user_agent(user_agent) is expected


def test_day_bounds_is_half_open_day():
    start, end = day_bounds(date(2026, 5, 4))

    assert start == datetime(2026, 5, 4, tzinfo=UTC)
    assert end - start == timedelta(days=1)


def test_ensure_utc_converts_offsets():
    value = datetime(2026, 1, 1, 3, 0, tzinfo=UTC).astimezone()

    assert ensure_utc(value) == datetime(2026, 1, 1, 3, 0, tzinfo=UTC)
    assert ensure_utc(datetime(2026, 1, 1)).tzinfo is UTC


def test_generate_cuid_unique():
    assert len({generate_cuid() for _ in range(50)}) == 50
