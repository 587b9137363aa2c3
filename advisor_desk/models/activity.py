# advisor_desk/models/activity.py
from pydantic import BaseModel, field_validator
from typing import Dict, Optional, Any
from datetime import datetime
from enum import Enum

from advisor_desk.models.student import ensure_utc


class InteractionKind(str, Enum):
    LOGIN = "login"
    AI_QUESTION = "ai_question"
    DOC_UPLOAD = "doc_upload"


class Channel(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    CALL = "call"
    NOTE = "note"


class Direction(str, Enum):
    OUTBOUND = "outbound"
    INBOUND = "inbound"


class TaskStatus(str, Enum):
    TODO = "todo"
    DONE = "done"


class SubRecord(BaseModel):
    """Common shape of everything filed under a student"""
    id: Optional[str] = None
    student_id: str

    @field_validator("*", mode="after")
    @classmethod
    def normalize_utc(cls, value):
        return ensure_utc(value)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]):
        data = {k: v for k, v in doc.items() if k != "_id"}
        data["id"] = str(doc["_id"]) if "_id" in doc else doc.get("id")
        data["student_id"] = str(data.get("student_id", ""))
        return cls(**data)

    def to_document(self) -> Dict[str, Any]:
        """Fields as stored in Mongo, without the id"""
        doc = self.model_dump(exclude={"id"}, exclude_none=True)
        return {k: (v.value if isinstance(v, Enum) else v) for k, v in doc.items()}


class Interaction(SubRecord):
    kind: InteractionKind
    detail: Optional[str] = None
    timestamp: Optional[datetime] = None


class Communication(SubRecord):
    channel: Channel
    direction: Direction = Direction.OUTBOUND
    subject: Optional[str] = None
    body: str = ""
    timestamp: Optional[datetime] = None
    author_id: Optional[str] = None


class Note(SubRecord):
    text: str = ""
    author_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Task(SubRecord):
    title: str
    status: TaskStatus = TaskStatus.TODO
    due_at: Optional[datetime] = None
    assigned_to: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value):
        return value or TaskStatus.TODO

    def toggled(self) -> TaskStatus:
        return TaskStatus.TODO if self.status == TaskStatus.DONE else TaskStatus.DONE
