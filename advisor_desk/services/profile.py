# advisor_desk/services/profile.py
import random
from typing import Callable, Optional, Any, Union

from pydantic import BaseModel

from advisor_desk.config import ADVISOR_AUTHOR_ID
from advisor_desk.logger import get_logger
from advisor_desk.models.student import StudentRecord, AppStatus
from advisor_desk.models.activity import (
    Interaction, Communication, Note, Task, Channel, Direction, TaskStatus,
)
from advisor_desk.services.cache import PendingList
from advisor_desk.services.errors import PartialWriteError, RecordNotFoundError
from advisor_desk.services.store import StudentStore, utcnow
from advisor_desk.services.summarize import (
    SummaryInputs, OutreachMessage, build_summary, follow_up_email,
)
from advisor_desk.utils.templates import FOLLOW_UP_SUBJECT

logger = get_logger(__name__)


class StudentProfileService:
    """One student's profile page: the record, its sub-records and every edit.

    Edits show up locally before the store confirms them and are rolled
    back if the store write fails; the error is then re-raised for the
    view to report. A communication that was stored but could not update
    the student's last contact stays in the list.
    """

    def __init__(self, store: StudentStore, student_id: str, author_id: Optional[str] = None):
        self.store = store
        self.student_id = student_id
        self.author_id = author_id or ADVISOR_AUTHOR_ID
        self.student: Optional[StudentRecord] = None
        self.interactions: PendingList[Interaction] = PendingList()
        self.communications: PendingList[Communication] = PendingList()
        self.notes: PendingList[Note] = PendingList()
        self.tasks: PendingList[Task] = PendingList()

    def load(self) -> StudentRecord:
        """Fetch the student and its sub-collections; raises RecordNotFoundError"""
        self.student = self.store.get_student(self.student_id)
        self.interactions.replace_all(self.store.list_interactions(self.student_id))
        self.communications.replace_all(self.store.list_communications(self.student_id))
        self.notes.replace_all(self.store.list_notes(self.student_id))
        self.tasks.replace_all(self.store.list_tasks(self.student_id))
        return self.student

    @property
    def progress(self) -> int:
        return self.student.progress if self.student else 0

    def _require_student(self) -> StudentRecord:
        if self.student is None:
            raise RecordNotFoundError("student", self.student_id)
        return self.student

    def _commit(self, items: PendingList, token: str, write: Callable[[], Any], action: str):
        try:
            result = write()
        except PartialWriteError as e:
            # Stored, so keep it; only the parent update is reported
            items.confirm(token, e.record)
            logger.error(f"Partly failed to {action} for student {self.student_id}: {e}")
            raise
        except Exception as e:
            items.revert(token)
            logger.error(f"Could not {action} for student {self.student_id}: {e}")
            raise
        items.confirm(token, result if isinstance(result, BaseModel) else None)
        return result

    # Status

    def update_status(self, status: Union[AppStatus, str]) -> StudentRecord:
        student = self._require_student()
        status = AppStatus(status)
        previous = student
        self.student = student.model_copy(update={"status": status})
        try:
            self.store.update_student(self.student_id, {"status": status})
        except Exception:
            self.student = previous
            raise
        logger.info(f"Student {self.student_id} moved to {status.value}")
        return self.student

    # Communications

    def log_communication(self,
                          channel: Union[Channel, str],
                          body: str,
                          subject: Optional[str] = None) -> Optional[Communication]:
        """Log an outbound message; blank bodies are ignored"""
        self._require_student()
        if not body or not body.strip():
            return None
        channel = Channel(channel)
        if subject is None and channel == Channel.EMAIL:
            subject = FOLLOW_UP_SUBJECT
        record = Communication(
            student_id=self.student_id,
            channel=channel,
            direction=Direction.OUTBOUND,
            subject=subject,
            body=body.strip(),
            timestamp=utcnow(),
            author_id=self.author_id,
        )
        token = self.communications.stage_insert(record)
        saved = self._commit(self.communications, token,
                             lambda: self.store.add_communication(record), "log communication")
        self._mirror_last_contact(saved)
        return saved

    def send_follow_up(self, rng: Optional[random.Random] = None) -> Communication:
        """Log a templated follow-up e-mail"""
        student = self._require_student()
        message: OutreachMessage = follow_up_email(student.name, rng)
        return self.log_communication(Channel.EMAIL, message.body, subject=message.subject)

    def _mirror_last_contact(self, saved: Communication) -> None:
        current = self.student.last_communication_at
        if saved.timestamp and (current is None or saved.timestamp > current):
            self.student = self.student.model_copy(update={"last_communication_at": saved.timestamp})

    # Notes

    def add_note(self, text: str) -> Optional[Note]:
        self._require_student()
        if not text or not text.strip():
            return None
        now = utcnow()
        record = Note(student_id=self.student_id, text=text.strip(), author_id=self.author_id,
                      created_at=now, updated_at=now)
        token = self.notes.stage_insert(record)
        return self._commit(self.notes, token, lambda: self.store.add_note(record), "add note")

    def save_note(self, note_id: str, text: str) -> Note:
        self._require_student()
        text = text.strip()
        token = self.notes.stage_update(note_id, text=text, updated_at=utcnow())
        self._commit(self.notes, token, lambda: self.store.update_note_text(note_id, text), "update note")
        return self.notes.get(note_id)

    def delete_note(self, note_id: str) -> None:
        self._require_student()
        token = self.notes.stage_delete(note_id)
        self._commit(self.notes, token, lambda: self.store.delete_note(note_id), "delete note")

    # Tasks

    def add_task(self, title: str) -> Optional[Task]:
        self._require_student()
        if not title or not title.strip():
            return None
        record = Task(student_id=self.student_id, title=title.strip(),
                      status=TaskStatus.TODO, created_at=utcnow())
        token = self.tasks.stage_insert(record)
        return self._commit(self.tasks, token, lambda: self.store.add_task(record), "create task")

    def toggle_task(self, task_id: str) -> Optional[Task]:
        self._require_student()
        task = self.tasks.get(task_id)
        if task is None:
            return None
        next_status = task.toggled()
        token = self.tasks.stage_update(task_id, status=next_status)
        self._commit(self.tasks, token, lambda: self.store.set_task_status(task_id, next_status), "update task")
        return self.tasks.get(task_id)

    def delete_task(self, task_id: str) -> None:
        self._require_student()
        token = self.tasks.stage_delete(task_id)
        self._commit(self.tasks, token, lambda: self.store.delete_task(task_id), "delete task")

    # Summary

    def generate_summary(self, rng: Optional[random.Random] = None) -> str:
        student = self._require_student()
        latest = self.communications.items[0].timestamp if self.communications.items else None
        inputs = SummaryInputs.for_student(student, self.interactions.items, latest)
        return build_summary(inputs, rng)
