"""Tests for page-entry state handling."""

from frontend.views.common import reset_page_state


def test_entering_a_page_drops_profile_snapshot():
    state = {
        "profile_service": object(),
        "ai_summary": "brief",
        "status_select": "Applying",
        "editing_note_id": "n1",
        "task_abc": True,
        "edit_n1": "draft",
        "session_provider": "kept",
        "students_sort": "kept",
        "flash": [("success", "kept")],
    }

    reset_page_state(state)

    assert state == {
        "session_provider": "kept",
        "students_sort": "kept",
        "flash": [("success", "kept")],
    }


def test_reset_on_empty_state():
    state = {}
    reset_page_state(state)
    assert state == {}
