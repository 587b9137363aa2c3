# frontend/views/common.py
import streamlit as st

from advisor_desk.models.student import AppStatus

STATUS_COLORS = {
    AppStatus.EXPLORING: "gray",
    AppStatus.SHORTLISTING: "orange",
    AppStatus.APPLYING: "blue",
    AppStatus.SUBMITTED: "green",
}


# Per-visit widget and profile state, dropped whenever a page is entered
PAGE_STATE_KEYS = ("profile_service", "ai_summary", "status_select", "editing_note_id")
PAGE_STATE_PREFIXES = ("task_", "edit_")


def reset_page_state(state) -> None:
    """Forget per-visit state so the next page load refetches from the store"""
    for key in list(state.keys()):
        if key in PAGE_STATE_KEYS or key.startswith(PAGE_STATE_PREFIXES):
            del state[key]


def navigate(page: str, **params):
    """Swap the query params and rerun into the new view"""
    reset_page_state(st.session_state)
    st.query_params.clear()
    st.query_params["page"] = page
    for key, value in params.items():
        if value is not None:
            st.query_params[key] = str(value)
    st.rerun()


def flash(message: str, kind: str = "success"):
    """Queue a notification that survives the next rerun"""
    st.session_state.setdefault("flash", []).append((kind, message))


def show_flash():
    icons = {"success": "✅", "error": "❌", "info": "ℹ️"}
    for kind, message in st.session_state.pop("flash", []):
        st.toast(message, icon=icons.get(kind, "ℹ️"))


def status_badge(status: AppStatus) -> str:
    color = STATUS_COLORS.get(status, "gray")
    return f":{color}-background[{status.value}]"


def stat_card(label: str, value, hint: str = None, key: str = None) -> bool:
    """A bordered counter; returns True when its filter button is clicked"""
    with st.container(border=True):
        st.metric(label, value)
        if hint and key:
            return st.button(hint, key=key, type="tertiary")
    return False
