# advisor_desk/services/filters.py
from pydantic import BaseModel
from typing import List, Optional, Iterable, Sequence, Union
from datetime import datetime, timezone
from enum import Enum

from advisor_desk.config import DASHBOARD_FETCH_LIMIT, STUDENT_LIST_LIMIT
from advisor_desk.models.student import StudentRecord, AppStatus, STATUS_OPTIONS
from advisor_desk.services.metrics import (
    is_stale_contact, is_high_intent, needs_essay_support,
)

ALL = "All"


class QuickFilter(str, Enum):
    NOT_CONTACTED_7D = "not_contacted_7d"
    HIGH_INTENT = "high_intent"
    NEEDS_ESSAY_HELP = "needs_essay_help"

    @classmethod
    def parse(cls, token: Optional[str]) -> Optional["QuickFilter"]:
        """Quick filter for a navigation token; unknown tokens mean no filter"""
        try:
            return cls(token) if token else None
        except ValueError:
            return None


class StudentFilter(BaseModel):
    text: str = ""
    status: Union[AppStatus, str] = ALL
    country: str = ALL
    quick: Optional[QuickFilter] = None


def list_fetch_limit(quick: Optional[QuickFilter]) -> int:
    """Rows to fetch for the student list.

    A counter click-through must read the same snapshot the dashboard
    counted, so quick filters use the dashboard limit.
    """
    return DASHBOARD_FETCH_LIMIT if quick else STUDENT_LIST_LIMIT


def matches_text(record: StudentRecord, text: str) -> bool:
    # Raw substring match, whitespace included
    needle = (text or "").lower()
    if not needle:
        return True
    return needle in record.name.lower() or needle in record.email.lower()


def matches_status(record: StudentRecord, status) -> bool:
    return status in (None, "", ALL) or record.status == status


def matches_country(record: StudentRecord, country) -> bool:
    return country in (None, "", ALL) or record.country == country


def matches_quick(record: StudentRecord, quick: Optional[QuickFilter], now: datetime) -> bool:
    if quick is None:
        return True
    if quick == QuickFilter.NOT_CONTACTED_7D:
        return is_stale_contact(record, now)
    if quick == QuickFilter.HIGH_INTENT:
        return is_high_intent(record)
    if quick == QuickFilter.NEEDS_ESSAY_HELP:
        return needs_essay_support(record)
    return True


def apply_filters(records: Iterable[StudentRecord],
                  flt: StudentFilter,
                  now: Optional[datetime] = None) -> List[StudentRecord]:
    """All predicates ANDed together, original order kept"""
    now = now or datetime.now(timezone.utc)
    return [
        r for r in records
        if matches_text(r, flt.text)
        and matches_status(r, flt.status)
        and matches_country(r, flt.country)
        and matches_quick(r, flt.quick, now)
    ]


def country_options(records: Iterable[StudentRecord]) -> List[str]:
    return [ALL] + sorted({r.country for r in records if r.country})


# Sorting (display only)

SORTABLE_COLUMNS = ("name", "email", "country", "status", "last_active")
_STAGE_RANK = {status: i for i, status in enumerate(STATUS_OPTIONS)}


class SortState(BaseModel):
    column: Optional[str] = "last_active"
    descending: bool = True

    def toggle(self, column: str) -> "SortState":
        """Header click: new column asc, then desc, then unsorted"""
        if column != self.column:
            return SortState(column=column, descending=False)
        if not self.descending:
            return SortState(column=column, descending=True)
        return SortState(column=None, descending=False)

    @property
    def arrow(self) -> str:
        if self.column is None:
            return ""
        return "▼" if self.descending else "▲"


def _sort_key(record: StudentRecord, column: str):
    value = getattr(record, column, None)
    if column == "status":
        return _STAGE_RANK.get(value, len(_STAGE_RANK))
    if isinstance(value, str):
        return value.lower()
    return value


def sort_records(records: Sequence[StudentRecord], sort: SortState) -> List[StudentRecord]:
    """New list ordered for display; missing values always go last"""
    if sort.column not in SORTABLE_COLUMNS:
        return list(records)
    present = [r for r in records if _sort_key(r, sort.column) is not None]
    missing = [r for r in records if _sort_key(r, sort.column) is None]
    present.sort(key=lambda r: _sort_key(r, sort.column), reverse=sort.descending)
    return present + missing
