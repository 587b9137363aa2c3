# advisor_desk/services/store.py
from pymongo import MongoClient, DESCENDING, ASCENDING
from pymongo.errors import PyMongoError
from bson import ObjectId
from bson.errors import InvalidId
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from typing import List, Dict, Any, Optional

from advisor_desk.config import MONGODB_URI, MONGODB_DB, STUDENT_LIST_LIMIT
from advisor_desk.logger import get_logger
from advisor_desk.models.student import StudentRecord, ensure_utc
from advisor_desk.models.activity import (
    Interaction, Communication, Note, Task, TaskStatus,
)
from advisor_desk.services.errors import PartialWriteError, RecordNotFoundError, StoreWriteError

logger = get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_object_id(record_id: Any) -> Optional[ObjectId]:
    """ObjectId for a string id, or None when it can't be one"""
    if isinstance(record_id, ObjectId):
        return record_id
    try:
        return ObjectId(str(record_id))
    except (InvalidId, TypeError):
        return None


@contextmanager
def write_guard(action: str):
    """Turn driver failures on a write into StoreWriteError"""
    try:
        yield
    except PyMongoError as e:
        logger.error(f"Failed to {action}: {e}", exc_info=True)
        raise StoreWriteError(f"Failed to {action}") from e


class StudentStore:
    """Students plus their interactions, communications, notes and tasks.

    Sub-records live in their own collections keyed by ``student_id``;
    their parent never changes after creation.
    """

    def __init__(self, db=None):
        if db is None:
            self.client = MongoClient(MONGODB_URI)
            db = self.client[MONGODB_DB]
        self.db = db
        self.students = db.students
        self.interactions = db.interactions
        self.communications = db.communications
        self.notes = db.notes
        self.tasks = db.tasks

    # Student Management
    def list_students(self,
                      limit: int = STUDENT_LIST_LIMIT,
                      order_by: str = "last_active",
                      descending: bool = True) -> List[StudentRecord]:
        """Fetch a snapshot of students, newest activity first by default"""
        cursor = (
            self.students.find({})
            .sort(order_by, DESCENDING if descending else ASCENDING)
            .limit(limit)
        )
        return [StudentRecord.from_document(doc) for doc in cursor]

    def get_student(self, student_id: str) -> StudentRecord:
        oid = to_object_id(student_id)
        doc = self.students.find_one({"_id": oid}) if oid else None
        if not doc:
            raise RecordNotFoundError("student", student_id)
        return StudentRecord.from_document(doc)

    def create_student(self, student: StudentRecord) -> StudentRecord:
        now = utcnow()
        doc = student.to_document()
        doc["created_at"] = doc.get("created_at") or now
        doc["updated_at"] = now
        with write_guard("create student"):
            result = self.students.insert_one(doc)
        logger.info(f"Created student {result.inserted_id}")
        return StudentRecord.from_document({**doc, "_id": result.inserted_id})

    def update_student(self, student_id: str, fields: Dict[str, Any]) -> None:
        """Field-level update; last write wins"""
        oid = to_object_id(student_id)
        if oid is None:
            raise RecordNotFoundError("student", student_id)
        data = {k: (v.value if isinstance(v, Enum) else v) for k, v in fields.items() if k not in ("_id", "id")}
        data["updated_at"] = utcnow()
        with write_guard("update student"):
            result = self.students.update_one({"_id": oid}, {"$set": data})
        if result.matched_count == 0:
            raise RecordNotFoundError("student", student_id)
        logger.info(f"Updated student {student_id}: {', '.join(sorted(fields))}")

    # Sub-record reads
    def _list(self, collection, model, student_id: str, order_by: str) -> list:
        cursor = collection.find({"student_id": str(student_id)}).sort(order_by, DESCENDING)
        return [model.from_document(doc) for doc in cursor]

    def list_interactions(self, student_id: str) -> List[Interaction]:
        return self._list(self.interactions, Interaction, student_id, "timestamp")

    def list_communications(self, student_id: str) -> List[Communication]:
        return self._list(self.communications, Communication, student_id, "timestamp")

    def list_notes(self, student_id: str) -> List[Note]:
        return self._list(self.notes, Note, student_id, "created_at")

    def list_tasks(self, student_id: str) -> List[Task]:
        return self._list(self.tasks, Task, student_id, "created_at")

    # Sub-record writes
    def _insert(self, collection, record, action: str):
        doc = record.to_document()
        with write_guard(action):
            result = collection.insert_one(doc)
        return record.model_copy(update={"id": str(result.inserted_id)})

    def add_interaction(self, interaction: Interaction) -> Interaction:
        if interaction.timestamp is None:
            interaction = interaction.model_copy(update={"timestamp": utcnow()})
        return self._insert(self.interactions, interaction, "log interaction")

    def add_communication(self, communication: Communication) -> Communication:
        """Append a communication and mirror its time onto the student.

        Raises PartialWriteError carrying the stored communication when the
        insert went through but the student could not be updated.
        """
        if communication.timestamp is None:
            communication = communication.model_copy(update={"timestamp": utcnow()})
        saved = self._insert(self.communications, communication, "log communication")
        logger.info(f"Logged {saved.channel.value} for student {saved.student_id}")

        try:
            with write_guard("update last communication"):
                self._mirror_last_communication(saved)
        except StoreWriteError as e:
            raise PartialWriteError("Communication saved, but last contact was not updated", saved) from e
        return saved

    def _mirror_last_communication(self, saved: Communication) -> None:
        oid = to_object_id(saved.student_id)
        parent = self.students.find_one({"_id": oid}, {"last_communication_at": 1}) if oid else None
        if not parent:
            return
        current = ensure_utc(parent.get("last_communication_at"))
        # Only move last_communication_at forward
        if current is None or saved.timestamp > current:
            self.students.update_one(
                {"_id": oid},
                {"$set": {"last_communication_at": saved.timestamp, "updated_at": utcnow()}},
            )

    def add_note(self, note: Note) -> Note:
        now = utcnow()
        note = note.model_copy(update={
            "created_at": note.created_at or now,
            "updated_at": now,
        })
        return self._insert(self.notes, note, "add note")

    def update_note_text(self, note_id: str, text: str) -> datetime:
        now = utcnow()
        self._update(self.notes, "note", note_id, {"text": text, "updated_at": now})
        return now

    def delete_note(self, note_id: str) -> None:
        self._delete(self.notes, "note", note_id)

    def add_task(self, task: Task) -> Task:
        if task.created_at is None:
            task = task.model_copy(update={"created_at": utcnow()})
        return self._insert(self.tasks, task, "create task")

    def set_task_status(self, task_id: str, status: TaskStatus) -> None:
        self._update(self.tasks, "task", task_id, {"status": TaskStatus(status).value, "updated_at": utcnow()})

    def delete_task(self, task_id: str) -> None:
        self._delete(self.tasks, "task", task_id)

    def _update(self, collection, kind: str, record_id: str, fields: Dict[str, Any]) -> None:
        oid = to_object_id(record_id)
        if oid is None:
            raise RecordNotFoundError(kind, record_id)
        # student_id is never part of an update
        fields.pop("student_id", None)
        with write_guard(f"update {kind}"):
            result = collection.update_one({"_id": oid}, {"$set": fields})
        if result.matched_count == 0:
            raise RecordNotFoundError(kind, record_id)

    def _delete(self, collection, kind: str, record_id: str) -> None:
        oid = to_object_id(record_id)
        if oid is None:
            raise RecordNotFoundError(kind, record_id)
        with write_guard(f"delete {kind}"):
            result = collection.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise RecordNotFoundError(kind, record_id)
        logger.info(f"Deleted {kind} {record_id}")
