# frontend/views/seed.py
import streamlit as st

from advisor_desk.services.seed import seed_activity, seed_students


def render(store, session):
    st.subheader("Seed Demo Data")
    st.caption("Dev-only helpers to populate MongoDB with fake students and activity.")

    count = st.number_input("Students to create", min_value=1, max_value=500, value=50)
    if st.button(f"Create {count} Students", type="primary"):
        with st.spinner("Seeding…"):
            try:
                seed_students(store, int(count))
                st.success(f"Seeded {count} students")
            except Exception as e:
                st.error(f"Seeding failed: {e}")

    st.divider()

    limit = st.number_input("Students to enrich", min_value=1, max_value=500, value=100)
    if st.button(f"Seed activity for {limit} Students"):
        with st.spinner("Seeding…"):
            try:
                writes = seed_activity(store, int(limit))
                st.success(f"Seeded interactions for up to {limit} students ({writes} writes).")
            except Exception as e:
                st.error(f"Seeding interactions failed: {e}")
