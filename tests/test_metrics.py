"""Tests for dashboard counters."""

import random
from datetime import timedelta

import pytest

from advisor_desk.models.student import AppStatus, STATUS_OPTIONS
from advisor_desk.services.metrics import (
    compute_dashboard_stats, is_stale_contact, is_recently_active,
)


def test_empty_snapshot_has_zeroed_histogram(now):
    stats = compute_dashboard_stats([], now)
    assert stats.total == 0
    assert stats.by_status == {status: 0 for status in STATUS_OPTIONS}


def test_status_histogram_sums_to_total(make_student, now):
    rng = random.Random(7)
    records = [make_student(status=rng.choice(STATUS_OPTIONS)) for _ in range(137)]

    stats = compute_dashboard_stats(records, now)

    assert stats.total == 137
    assert sum(stats.by_status.values()) == stats.total
    assert stats.by_status[AppStatus.APPLYING] == sum(1 for r in records if r.status == AppStatus.APPLYING)


@pytest.mark.parametrize("age, stale", [
    (timedelta(days=7), False),
    (timedelta(days=7, milliseconds=1), True),
    (timedelta(days=1), False),
])
def test_stale_contact_boundary(make_student, now, age, stale):
    record = make_student(last_communication_at=now - age)
    assert is_stale_contact(record, now) is stale


def test_missing_contact_counts_as_stale(make_student, now):
    record = make_student(last_communication_at=None)
    assert is_stale_contact(record, now)
    assert compute_dashboard_stats([record], now).not_contacted_7d == 1


@pytest.mark.parametrize("age, active", [
    (timedelta(days=14), True),
    (timedelta(days=14, milliseconds=1), False),
    (timedelta(hours=3), True),
])
def test_active_window_boundary(make_student, now, age, active):
    record = make_student(last_active=now - age)
    assert is_recently_active(record, now) is active


def test_missing_last_active_is_not_active(make_student, now):
    assert compute_dashboard_stats([make_student(last_active=None)], now).active == 0


def test_flag_counters(make_student, now):
    records = [
        make_student(high_intent=True),
        make_student(high_intent=True, needs_essay_help=True),
        make_student(needs_essay_help=True),
        make_student(tags=["Essay"]),  # flag derived from tag
        make_student(),
    ]
    stats = compute_dashboard_stats(records, now)
    assert stats.high_intent == 2
    assert stats.needs_essay_help == 3
