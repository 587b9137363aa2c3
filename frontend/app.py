# frontend/app.py
import streamlit as st

# Page configuration MUST be the first Streamlit command
st.set_page_config(
    page_title="Advisor Desk",
    page_icon="🎓",
    layout="wide"
)

import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from advisor_desk.config import DEBUG
from advisor_desk.logger import setup_logging
from advisor_desk.services.auth import AuthService, SessionProvider
from advisor_desk.services.errors import AuthenticationError
from advisor_desk.services.store import StudentStore
from frontend.views import dashboard, students, profile, seed
from frontend.views.common import navigate, show_flash

PAGES = {
    "students": students.render,
    "dashboard": dashboard.render,
    "profile": profile.render,
    "seed": seed.render,
}


# Initialize services - ONLY ONCE per server process
@st.cache_resource
def get_services():
    setup_logging()
    return {
        "store": StudentStore(),
        "auth": AuthService(),
    }


services = get_services()
store = services["store"]

# One session provider per browser session
if "session_provider" not in st.session_state:
    provider = SessionProvider(services["auth"])
    provider.start()
    st.session_state.session_provider = provider
provider = st.session_state.session_provider
session = provider.session


def sign_out():
    provider.sign_out()
    for key in list(st.session_state.keys()):
        if key != "session_provider":
            del st.session_state[key]


def login_view():
    st.title("🎓 Advisor Desk")
    with st.form("login_form"):
        st.subheader("Sign in")
        st.caption("Use an advisor account created with `python main.py create-advisor`.")
        email = st.text_input("Email", placeholder="admin@example.com")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Continue", type="primary")

    if submitted:
        try:
            provider.sign_in(email, password)
        except AuthenticationError as e:
            st.error(str(e))
            return
        except Exception as e:
            st.error(f"Login failed: {e}")
            return
        st.session_state.flash = [("success", "Welcome back!")]
        navigate("students")


# Main application logic
if session.loading:
    st.write("Loading…")
    st.stop()

if not session.is_authenticated:
    login_view()
    st.stop()

show_flash()

page = st.query_params.get("page", "students")
if page not in PAGES or (page == "seed" and not DEBUG):
    page = "students"

with st.sidebar:
    st.markdown("### 🎓 Advisor Desk")
    st.caption(session.user.email)
    if st.button("Students", use_container_width=True):
        navigate("students")
    if st.button("Dashboard", use_container_width=True):
        navigate("dashboard")
    if DEBUG and st.button("Seed demo data", use_container_width=True):
        navigate("seed")
    st.divider()
    if st.button("Sign out", type="primary", use_container_width=True):
        sign_out()
        st.query_params.clear()
        st.rerun()

PAGES[page](store, session)
