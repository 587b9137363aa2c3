# frontend/views/dashboard.py
import streamlit as st

from advisor_desk.config import DASHBOARD_FETCH_LIMIT
from advisor_desk.models.student import AppStatus
from advisor_desk.services.filters import QuickFilter
from advisor_desk.services.metrics import compute_dashboard_stats
from frontend.views.common import navigate, stat_card


def render(store, session):
    st.subheader("Dashboard")

    with st.spinner("Loading…"):
        try:
            students = store.list_students(limit=DASHBOARD_FETCH_LIMIT)
        except Exception as e:
            st.error(f"Failed to load students: {e}")
            return

    stats = compute_dashboard_stats(students)

    row1 = st.columns(4)
    with row1[0]:
        stat_card("Total Students", stats.total)
    with row1[1]:
        stat_card("Active (14d)", stats.active)
    with row1[2]:
        stat_card("Exploring", stats.by_status[AppStatus.EXPLORING])
    with row1[3]:
        stat_card("Shortlisting", stats.by_status[AppStatus.SHORTLISTING])

    row2 = st.columns(4)
    with row2[0]:
        stat_card("Applying", stats.by_status[AppStatus.APPLYING])
    with row2[1]:
        stat_card("Submitted", stats.by_status[AppStatus.SUBMITTED])

    # Counters that click through to the matching student list
    clickable = [
        ("Needs essay help", stats.needs_essay_help, QuickFilter.NEEDS_ESSAY_HELP),
        ("Not contacted in 7d", stats.not_contacted_7d, QuickFilter.NOT_CONTACTED_7D),
        ("High intent", stats.high_intent, QuickFilter.HIGH_INTENT),
    ]
    row3 = st.columns(4)
    for col, (label, value, quick) in zip(row3, clickable):
        with col:
            if stat_card(label, value, hint="Click to filter", key=f"qf_{quick.value}"):
                navigate("students", qf=quick.value)
