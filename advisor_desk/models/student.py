# advisor_desk/models/student.py
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, List, Optional, Any
from datetime import datetime, timezone
from enum import Enum


class AppStatus(str, Enum):
    EXPLORING = "Exploring"
    SHORTLISTING = "Shortlisting"
    APPLYING = "Applying"
    SUBMITTED = "Submitted"


# Funnel order, earliest stage first
STATUS_OPTIONS: List[AppStatus] = [
    AppStatus.EXPLORING,
    AppStatus.SHORTLISTING,
    AppStatus.APPLYING,
    AppStatus.SUBMITTED,
]

_PROGRESS = {
    AppStatus.EXPLORING: 10,
    AppStatus.SHORTLISTING: 35,
    AppStatus.APPLYING: 70,
    AppStatus.SUBMITTED: 100,
}


def status_to_progress(status: Any) -> int:
    """Percent complete for a funnel stage; 0 for anything unrecognised"""
    try:
        return _PROGRESS[AppStatus(status)]
    except ValueError:
        return 0


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Mongo hands back naive datetimes; they are stored as UTC"""
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class StudentRecord(BaseModel):
    id: Optional[str] = None
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    grade: Optional[str] = None
    country: str = ""
    status: AppStatus = AppStatus.EXPLORING
    last_active: Optional[datetime] = None
    last_communication_at: Optional[datetime] = None
    high_intent: bool = False
    needs_essay_help: bool = False
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("last_active", "last_communication_at", "created_at", "updated_at")
    @classmethod
    def normalize_utc(cls, value):
        return ensure_utc(value)

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, value):
        return list(value) if value else []

    @field_validator("high_intent", "needs_essay_help", mode="before")
    @classmethod
    def default_flags(cls, value):
        return bool(value) if value is not None else False

    @field_validator("name", "email", "country", mode="before")
    @classmethod
    def default_text(cls, value):
        return value or ""

    @field_validator("grade", mode="before")
    @classmethod
    def grade_as_text(cls, value):
        return str(value) if value is not None else None

    @model_validator(mode="before")
    @classmethod
    def derive_essay_flag(cls, data):
        # Older documents only carry the "Essay" tag
        if isinstance(data, dict) and data.get("needs_essay_help") is None:
            data = dict(data)
            data["needs_essay_help"] = "Essay" in (data.get("tags") or [])
        return data

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else ""

    @property
    def progress(self) -> int:
        return status_to_progress(self.status)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "StudentRecord":
        """Build a record from a raw students document"""
        data = {k: v for k, v in doc.items() if k != "_id"}
        data["id"] = str(doc["_id"]) if "_id" in doc else doc.get("id")
        if data.get("status") not in {s.value for s in AppStatus}:
            data["status"] = AppStatus.EXPLORING
        return cls(**data)

    def to_document(self) -> Dict[str, Any]:
        """Fields as stored in Mongo, without the id"""
        doc = self.model_dump(exclude={"id"})
        doc["status"] = self.status.value
        return doc
