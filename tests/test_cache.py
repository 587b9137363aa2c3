"""Tests for the pending-write overlay."""

from advisor_desk.models.activity import Note
from advisor_desk.services.cache import PendingList, TEMP_PREFIX


def _note(note_id, text="hello"):
    return Note(id=note_id, student_id="s1", text=text)


def test_staged_insert_shows_first_with_temp_id():
    notes = PendingList([_note("n1")])
    token = notes.stage_insert(Note(student_id="s1", text="draft"))

    assert token.startswith(TEMP_PREFIX)
    assert [n.id for n in notes.items] == [token, "n1"]
    assert notes.has_pending


def test_confirm_insert_swaps_in_server_copy():
    notes = PendingList([_note("n1")])
    token = notes.stage_insert(Note(student_id="s1", text="draft"))
    notes.confirm(token, _note("n2", "draft"))

    assert [n.id for n in notes.items] == ["n2", "n1"]
    assert not notes.has_pending


def test_revert_insert_leaves_list_untouched():
    notes = PendingList([_note("n1")])
    before = notes.items
    token = notes.stage_insert(Note(student_id="s1", text="draft"))
    notes.revert(token)

    assert notes.items == before
    assert not notes.has_pending


def test_update_overlay_and_revert():
    notes = PendingList([_note("n1", "old")])
    token = notes.stage_update("n1", text="new")
    assert notes.get("n1").text == "new"

    notes.revert(token)
    assert notes.get("n1").text == "old"


def test_update_confirm_persists():
    notes = PendingList([_note("n1", "old")])
    token = notes.stage_update("n1", text="new")
    notes.confirm(token)
    assert not notes.has_pending
    assert notes.get("n1").text == "new"


def test_delete_hides_until_reverted():
    notes = PendingList([_note("n1"), _note("n2")])
    token = notes.stage_delete("n1")
    assert [n.id for n in notes.items] == ["n2"]

    notes.revert(token)
    assert [n.id for n in notes.items] == ["n1", "n2"]


def test_delete_confirm_drops_record():
    notes = PendingList([_note("n1"), _note("n2")])
    notes.confirm(notes.stage_delete("n1"))
    assert [n.id for n in notes.items] == ["n2"]
    assert notes.get("n1") is None


def test_multiple_pending_inserts_newest_first():
    notes = PendingList()
    first = notes.stage_insert(Note(student_id="s1", text="one"))
    second = notes.stage_insert(Note(student_id="s1", text="two"))
    assert [n.id for n in notes.items] == [second, first]
