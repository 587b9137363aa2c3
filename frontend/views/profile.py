# frontend/views/profile.py
import streamlit as st

from advisor_desk.models.student import STATUS_OPTIONS
from advisor_desk.models.activity import Channel, TaskStatus
from advisor_desk.services.errors import AdvisorDeskError, RecordNotFoundError
from advisor_desk.services.profile import StudentProfileService
from advisor_desk.utils.timefmt import format_timestamp
from frontend.views.common import flash, navigate


def _profile_service(store, student_id, session) -> StudentProfileService:
    """One service per open profile so pending edits survive reruns"""
    service = st.session_state.get("profile_service")
    if service is None or service.student_id != student_id:
        author_id = session.user.id if session.user else None
        service = StudentProfileService(store, student_id, author_id=author_id)
        service.load()
        st.session_state.profile_service = service
        st.session_state.pop("ai_summary", None)
        st.session_state.pop("status_select", None)
    return service


def _attempt(action, success: str, failure: str) -> bool:
    try:
        action()
    except AdvisorDeskError as e:
        flash(f"{failure}: {e}", "error")
        return False
    if success:
        flash(success)
    return True


def render(store, session):
    student_id = st.query_params.get("id")
    if not student_id:
        navigate("students")

    try:
        with st.spinner("Loading…"):
            service = _profile_service(store, student_id, session)
    except RecordNotFoundError:
        st.error("Student not found.")
        st.stop()
    except Exception as e:
        st.error(f"Failed to load profile: {e}")
        st.stop()

    _header(service)
    _summary(service)

    left, right = st.columns([2, 1])
    with left:
        _timeline(service)
        _communications(service)
    with right:
        _notes(service)
        _tasks(service)


def _header(service: StudentProfileService):
    student = service.student
    with st.container(border=True):
        info, controls = st.columns([3, 2])
        with info:
            st.subheader(student.name)
            details = [student.email, student.country]
            if student.grade:
                details.append(f"Grade {student.grade}")
            st.caption(" • ".join(d for d in details if d))
        with controls:
            status_values = [s.value for s in STATUS_OPTIONS]
            st.session_state.setdefault("status_select", student.status.value)

            def on_status_change():
                new_status = st.session_state.status_select
                if not _attempt(lambda: service.update_status(new_status), "Status updated", "Failed to update status"):
                    st.session_state.status_select = service.student.status.value

            st.selectbox("Status", status_values, key="status_select", on_change=on_status_change)
            if st.button("✉️ Send follow-up", help="Log a follow-up email (mock)", type="primary"):
                _attempt(service.send_follow_up, "Follow-up email logged (mock)", "Failed to log follow-up")
                st.rerun()

        st.progress(service.progress)
        st.caption(f"{service.progress}% complete")


def _summary(service: StudentProfileService):
    with st.container(border=True):
        title, button = st.columns([4, 1])
        title.markdown("**AI Summary (mock)**")
        if button.button("Generate", key="summarize"):
            st.session_state.ai_summary = service.generate_summary()
            flash("AI Summary generated (mock)")
            st.rerun()
        summary = st.session_state.get("ai_summary")
        if summary:
            st.markdown(summary)
        else:
            st.caption("No summary yet. Click *Generate* to create a short advisor brief.")


def _timeline(service: StudentProfileService):
    with st.container(border=True):
        st.markdown("**Interaction Timeline**")
        items = service.interactions.items
        if not items:
            st.caption("No interactions yet.")
        for it in items:
            with st.container(border=True):
                st.markdown(f"**{it.kind.value.replace('_', ' ').capitalize()}**")
                if it.detail:
                    st.write(it.detail)
                st.caption(format_timestamp(it.timestamp))


def _communications(service: StudentProfileService):
    with st.container(border=True):
        st.markdown("**Communications**")
        with st.form("log_communication", clear_on_submit=True):
            body = st.text_area("Message", placeholder="e.g., Called student to discuss essays…",
                                label_visibility="collapsed")
            channel = st.selectbox("Channel", [c.value for c in Channel],
                                   format_func=lambda c: c.upper() if c == "sms" else c.capitalize())
            if st.form_submit_button("Log"):
                if body.strip():
                    _attempt(lambda: service.log_communication(channel, body),
                             "Communication logged", "Failed to log communication")
                    st.rerun()

        items = service.communications.items
        if not items:
            st.caption("No communications logged.")
        for c in items:
            with st.container(border=True):
                subject = f" • {c.subject}" if c.subject else ""
                st.markdown(f"**{c.channel.value.upper()}{subject}**")
                st.write(c.body)
                st.caption(format_timestamp(c.timestamp))


def _notes(service: StudentProfileService):
    with st.container(border=True):
        st.markdown("**Internal Notes**")
        with st.form("add_note", clear_on_submit=True):
            text = st.text_area("Note", placeholder="Add a note for the team…", label_visibility="collapsed")
            if st.form_submit_button("Add") and text.strip():
                _attempt(lambda: service.add_note(text), "Note added", "Failed to add note")
                st.rerun()

        items = service.notes.items
        if not items:
            st.caption("No notes yet.")
        editing = st.session_state.get("editing_note_id")
        for n in items:
            with st.container(border=True):
                if editing == n.id:
                    new_text = st.text_area("Edit note", value=n.text, key=f"edit_{n.id}",
                                            label_visibility="collapsed")
                    save, cancel = st.columns(2)
                    if save.button("Save", key=f"save_{n.id}", type="primary"):
                        if _attempt(lambda: service.save_note(n.id, new_text), "Note updated", "Failed to update note"):
                            st.session_state.editing_note_id = None
                        st.rerun()
                    if cancel.button("Cancel", key=f"cancel_{n.id}"):
                        st.session_state.editing_note_id = None
                        st.rerun()
                else:
                    st.write(n.text)
                    edit, delete = st.columns(2)
                    if edit.button("✏️ Edit", key=f"editbtn_{n.id}", type="tertiary"):
                        st.session_state.editing_note_id = n.id
                        st.rerun()
                    if delete.button("🗑️ Delete", key=f"delnote_{n.id}", type="tertiary"):
                        _attempt(lambda: service.delete_note(n.id), "Note deleted", "Failed to delete note")
                        st.rerun()


def _tasks(service: StudentProfileService):
    with st.container(border=True):
        st.markdown("**Tasks / Reminders**")
        with st.form("add_task", clear_on_submit=True):
            title = st.text_input("Task", placeholder="Follow up about essay outline…",
                                  label_visibility="collapsed")
            if st.form_submit_button("Add") and title.strip():
                _attempt(lambda: service.add_task(title), "Task created", "Failed to create task")
                st.rerun()

        items = service.tasks.items
        if not items:
            st.caption("No tasks yet.")
        for t in items:
            with st.container(border=True):
                done = t.status == TaskStatus.DONE
                check, delete = st.columns([4, 1])
                label = f"~~{t.title}~~" if done else t.title
                key = f"task_{t.id}"
                st.session_state.setdefault(key, done)

                def on_toggle(task_id=t.id, key=key, was_done=done):
                    if not _attempt(lambda: service.toggle_task(task_id), "", "Failed to update task"):
                        st.session_state[key] = was_done

                check.checkbox(label, key=key, on_change=on_toggle)
                check.caption(format_timestamp(t.created_at))
                if delete.button("🗑️", key=f"deltask_{t.id}", help="Delete task", type="tertiary"):
                    _attempt(lambda: service.delete_task(t.id), "Task deleted", "Failed to delete task")
                    st.rerun()
