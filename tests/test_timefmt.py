from datetime import datetime, timedelta

import pytest

from advisor_desk.utils.timefmt import format_timestamp, time_ago


@pytest.mark.parametrize("delta, expected", [
    (timedelta(seconds=10), "less than a minute ago"),
    (timedelta(minutes=5), "5 minutes ago"),
    (timedelta(hours=5), "about 5 hours ago"),
    (timedelta(days=1, hours=2), "1 day ago"),
    (timedelta(days=3), "3 days ago"),
    (timedelta(days=45), "about 1 month ago"),
    (timedelta(days=-2), "in 2 days"),
])
def test_time_ago(now, delta, expected):
    assert time_ago(now - delta, now) == expected


def test_naive_datetimes_are_utc(now):
    naive = datetime(2026, 10, 16, 12, 0)
    assert time_ago(naive, now) == "3 days ago"


def test_missing_values_use_default(now):
    assert time_ago(None, now) == "—"
    assert time_ago(None, now, default="unknown") == "unknown"
    assert format_timestamp(None) == "—"


def test_format_timestamp(now):
    assert format_timestamp(now) == "Oct 19, 2026, 12:00 PM"
