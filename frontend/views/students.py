# frontend/views/students.py
import streamlit as st

from advisor_desk.models.student import STATUS_OPTIONS
from advisor_desk.services.filters import (
    ALL, QuickFilter, SortState, StudentFilter, apply_filters, country_options,
    list_fetch_limit, sort_records,
)
from advisor_desk.utils.timefmt import time_ago
from frontend.views.common import navigate, status_badge

COLUMNS = [
    ("name", "Name", 3),
    ("email", "Email", 3),
    ("country", "Country", 2),
    ("status", "Status", 2),
    ("last_active", "Last Active", 2),
]


def _sort_state() -> SortState:
    if "students_sort" not in st.session_state:
        st.session_state.students_sort = SortState()
    return st.session_state.students_sort


def render(store, session):
    st.subheader("Students")

    quick = QuickFilter.parse(st.query_params.get("qf"))

    with st.spinner("Loading…"):
        try:
            students = store.list_students(limit=list_fetch_limit(quick))
        except Exception as e:
            st.error(f"Failed to load students: {e}")
            return

    c1, c2, c3 = st.columns([3, 2, 2])
    with c1:
        text = st.text_input("Search", placeholder="Search name or email…", label_visibility="collapsed")
    with c2:
        status = st.selectbox("Status", [ALL] + [s.value for s in STATUS_OPTIONS], label_visibility="collapsed")
    with c3:
        country = st.selectbox("Country", country_options(students), label_visibility="collapsed")

    if quick:
        st.caption(f"Quick filter: **{quick.value.replace('_', ' ')}**")
        if st.button("Clear quick filter", type="tertiary"):
            navigate("students")

    flt = StudentFilter(text=text, status=status, country=country, quick=quick)
    filtered = apply_filters(students, flt)

    sort = _sort_state()
    header = st.columns([w for _, _, w in COLUMNS])
    for col, (key, label, _) in zip(header, COLUMNS):
        arrow = f" {sort.arrow}" if sort.column == key else ""
        if col.button(f"{label}{arrow}", key=f"sort_{key}", type="tertiary"):
            st.session_state.students_sort = sort.toggle(key)
            st.rerun()

    if not filtered:
        st.info("No students found")
        return

    for record in sort_records(filtered, sort):
        row = st.columns([w for _, _, w in COLUMNS])
        if row[0].button(record.name or "(no name)", key=f"open_{record.id}", type="tertiary"):
            navigate("profile", id=record.id)
        row[1].write(record.email)
        row[2].write(record.country)
        row[3].markdown(status_badge(record.status))
        row[4].caption(time_ago(record.last_active))

    st.caption(f"{len(filtered)} of {len(students)} students")
