import sys
from datetime import datetime, timezone
from pathlib import Path

import mongomock
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from advisor_desk.models.student import StudentRecord


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def mongo_db():
    client = mongomock.MongoClient()
    return client["advisor_desk_test"]


@pytest.fixture
def store(mongo_db):
    from advisor_desk.services.store import StudentStore

    return StudentStore(db=mongo_db)


@pytest.fixture
def make_student():
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        data = {
            "id": f"s{n}",
            "name": f"Student {n}",
            "email": f"student{n}@example.com",
            "country": "India",
            "status": "Exploring",
            "last_active": NOW,
            "last_communication_at": NOW,
        }
        data.update(overrides)
        return StudentRecord(**data)

    return _make
