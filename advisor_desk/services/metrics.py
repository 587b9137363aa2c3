# advisor_desk/services/metrics.py
from pydantic import BaseModel, Field
from typing import Dict, Iterable, Optional
from datetime import datetime, timedelta, timezone

from advisor_desk.config import ACTIVE_WINDOW_DAYS, STALE_CONTACT_DAYS
from advisor_desk.models.student import StudentRecord, AppStatus, STATUS_OPTIONS

ACTIVE_WINDOW = timedelta(days=ACTIVE_WINDOW_DAYS)
STALE_CONTACT_WINDOW = timedelta(days=STALE_CONTACT_DAYS)


# Shared with the quick filters so counter click-through shows the same rows
def is_recently_active(record: StudentRecord, now: datetime) -> bool:
    return record.last_active is not None and now - record.last_active <= ACTIVE_WINDOW


def is_stale_contact(record: StudentRecord, now: datetime) -> bool:
    last = record.last_communication_at
    return last is None or now - last > STALE_CONTACT_WINDOW


def is_high_intent(record: StudentRecord) -> bool:
    return record.high_intent


def needs_essay_support(record: StudentRecord) -> bool:
    return record.needs_essay_help


def _empty_histogram() -> Dict[AppStatus, int]:
    return {status: 0 for status in STATUS_OPTIONS}


class DashboardStats(BaseModel):
    total: int = 0
    by_status: Dict[AppStatus, int] = Field(default_factory=_empty_histogram)
    active: int = 0
    needs_essay_help: int = 0
    not_contacted_7d: int = 0
    high_intent: int = 0


def compute_dashboard_stats(records: Iterable[StudentRecord],
                            now: Optional[datetime] = None) -> DashboardStats:
    """Reduce a student snapshot to the dashboard counters in one pass"""
    now = now or datetime.now(timezone.utc)
    stats = DashboardStats()

    for record in records:
        stats.total += 1
        stats.by_status[record.status] = stats.by_status.get(record.status, 0) + 1
        if is_recently_active(record, now):
            stats.active += 1
        if needs_essay_support(record):
            stats.needs_essay_help += 1
        if is_stale_contact(record, now):
            stats.not_contacted_7d += 1
        if is_high_intent(record):
            stats.high_intent += 1

    return stats
