"""Tests for student and sub-record models."""

from datetime import datetime, timezone

from bson import ObjectId

from advisor_desk.models.student import (
    AppStatus, StudentRecord, STATUS_OPTIONS, status_to_progress,
)
from advisor_desk.models.activity import Task, TaskStatus, Communication, Channel, Direction


def test_status_options_follow_funnel_order():
    assert [s.value for s in STATUS_OPTIONS] == ["Exploring", "Shortlisting", "Applying", "Submitted"]


def test_status_to_progress():
    assert status_to_progress("Exploring") == 10
    assert status_to_progress(AppStatus.SHORTLISTING) == 35
    assert status_to_progress("Applying") == 70
    assert status_to_progress("Submitted") == 100
    assert status_to_progress("Withdrawn") == 0


def test_from_document_defaults_missing_fields():
    oid = ObjectId()
    record = StudentRecord.from_document({"_id": oid, "name": "Ana Silva", "email": "ana@example.com"})

    assert record.id == str(oid)
    assert record.tags == []
    assert record.high_intent is False
    assert record.needs_essay_help is False
    assert record.status == AppStatus.EXPLORING
    assert record.last_communication_at is None
    assert record.country == ""


def test_essay_flag_derived_from_tags_when_absent():
    record = StudentRecord.from_document({"_id": ObjectId(), "name": "A", "tags": ["Essay", "SAT"]})
    assert record.needs_essay_help is True


def test_explicit_essay_flag_wins_over_tags():
    record = StudentRecord.from_document(
        {"_id": ObjectId(), "name": "A", "tags": ["Essay"], "needs_essay_help": False}
    )
    assert record.needs_essay_help is False


def test_unknown_status_falls_back_to_exploring():
    record = StudentRecord.from_document({"_id": ObjectId(), "name": "A", "status": "Archived"})
    assert record.status == AppStatus.EXPLORING


def test_naive_datetimes_read_as_utc():
    record = StudentRecord.from_document(
        {"_id": ObjectId(), "name": "A", "last_active": datetime(2026, 10, 1, 8, 30)}
    )
    assert record.last_active.tzinfo == timezone.utc


def test_null_text_fields_become_empty():
    record = StudentRecord.from_document({"_id": ObjectId(), "name": None, "email": None, "country": None})
    assert record.name == ""
    assert record.email == ""
    assert record.first_name == ""


def test_to_document_stores_plain_status_string():
    doc = StudentRecord(name="Ana", status=AppStatus.APPLYING).to_document()
    assert doc["status"] == "Applying"
    assert type(doc["status"]) is str
    assert "id" not in doc


def test_task_toggle_is_two_state():
    task = Task(student_id="s1", title="Essay outline")
    assert task.status == TaskStatus.TODO
    assert task.toggled() == TaskStatus.DONE
    assert task.model_copy(update={"status": TaskStatus.DONE}).toggled() == TaskStatus.TODO


def test_missing_task_status_defaults_to_todo():
    task = Task.from_document({"_id": ObjectId(), "student_id": "s1", "title": "x", "status": None})
    assert task.status == TaskStatus.TODO


def test_sub_record_document_has_plain_values():
    comm = Communication(student_id="s1", channel=Channel.SMS, body="hi")
    doc = comm.to_document()
    assert doc == {"student_id": "s1", "channel": "sms", "direction": "outbound", "body": "hi"}
    assert comm.direction == Direction.OUTBOUND
