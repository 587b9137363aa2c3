"""Tests for the MongoDB record store."""

from datetime import timedelta

import pytest
from pymongo.errors import PyMongoError

from advisor_desk.models.activity import (
    Communication, Channel, Interaction, InteractionKind, Note, Task, TaskStatus,
)
from advisor_desk.models.student import AppStatus, StudentRecord
from advisor_desk.services.errors import PartialWriteError, RecordNotFoundError, StoreWriteError


@pytest.fixture
def student(store, now):
    return store.create_student(StudentRecord(
        name="Ana Silva",
        email="ana@example.com",
        country="Brazil",
        status=AppStatus.SHORTLISTING,
        last_active=now,
        tags=["Essay"],
    ))


def test_create_and_get_student(store, student):
    fetched = store.get_student(student.id)
    assert fetched.name == "Ana Silva"
    assert fetched.status == AppStatus.SHORTLISTING
    assert fetched.tags == ["Essay"]
    assert fetched.created_at is not None
    assert fetched.last_active.tzinfo is not None


def test_get_missing_student_raises(store):
    with pytest.raises(RecordNotFoundError):
        store.get_student("0123456789abcdef01234567")
    with pytest.raises(RecordNotFoundError):
        store.get_student("not-an-object-id")


def test_list_students_newest_activity_first_with_limit(store, now):
    for days in (5, 1, 3):
        store.create_student(StudentRecord(name=f"S{days}", last_active=now - timedelta(days=days)))

    names = [s.name for s in store.list_students(limit=2)]
    assert names == ["S1", "S3"]


def test_update_student_sets_fields(store, student):
    store.update_student(student.id, {"status": AppStatus.SUBMITTED, "high_intent": True})
    fetched = store.get_student(student.id)
    assert fetched.status == AppStatus.SUBMITTED
    assert fetched.high_intent is True


def test_update_missing_student_raises(store):
    with pytest.raises(RecordNotFoundError):
        store.update_student("0123456789abcdef01234567", {"status": "Applying"})


def test_communication_mirrors_last_contact(store, student, now):
    saved = store.add_communication(Communication(
        student_id=student.id, channel=Channel.EMAIL, body="Hello", timestamp=now,
    ))
    assert saved.id

    older = now - timedelta(days=3)
    store.add_communication(Communication(
        student_id=student.id, channel=Channel.SMS, body="Earlier", timestamp=older,
    ))

    fetched = store.get_student(student.id)
    assert abs(fetched.last_communication_at - now) < timedelta(seconds=1)

    comms = store.list_communications(student.id)
    assert [c.body for c in comms] == ["Hello", "Earlier"]


def test_communication_gets_server_timestamp(store, student):
    saved = store.add_communication(Communication(student_id=student.id, channel=Channel.CALL, body="Call"))
    assert saved.timestamp is not None
    assert store.get_student(student.id).last_communication_at is not None


def test_sub_records_are_scoped_to_student(store, student, now):
    other = store.create_student(StudentRecord(name="Ben"))
    store.add_interaction(Interaction(student_id=student.id, kind=InteractionKind.LOGIN, timestamp=now))
    store.add_interaction(Interaction(student_id=other.id, kind=InteractionKind.DOC_UPLOAD, timestamp=now))

    kinds = [i.kind for i in store.list_interactions(student.id)]
    assert kinds == [InteractionKind.LOGIN]


def test_note_edit_and_delete(store, student):
    note = store.add_note(Note(student_id=student.id, text="first"))
    store.update_note_text(note.id, "edited")

    notes = store.list_notes(student.id)
    assert [n.text for n in notes] == ["edited"]
    assert notes[0].student_id == student.id

    store.delete_note(note.id)
    assert store.list_notes(student.id) == []
    with pytest.raises(RecordNotFoundError):
        store.delete_note(note.id)


def test_task_status_toggle_and_delete(store, student):
    task = store.add_task(Task(student_id=student.id, title="Essay outline"))
    store.set_task_status(task.id, TaskStatus.DONE)
    assert store.list_tasks(student.id)[0].status == TaskStatus.DONE

    store.delete_task(task.id)
    assert store.list_tasks(student.id) == []


def test_failed_last_contact_mirror_reports_stored_record(store, student, monkeypatch):
    def boom(*args, **kwargs):
        raise PyMongoError("connection reset")

    monkeypatch.setattr(store.students, "update_one", boom)
    with pytest.raises(PartialWriteError) as excinfo:
        store.add_communication(Communication(student_id=student.id, channel=Channel.EMAIL, body="Hi"))

    assert excinfo.value.record.id
    assert [c.id for c in store.list_communications(student.id)] == [excinfo.value.record.id]


def test_write_failure_becomes_store_write_error(store, student, monkeypatch):
    def boom(*args, **kwargs):
        raise PyMongoError("connection reset")

    monkeypatch.setattr(store.notes, "insert_one", boom)
    with pytest.raises(StoreWriteError):
        store.add_note(Note(student_id=student.id, text="lost"))
