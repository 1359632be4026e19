import streamlit as st

from use_cases.session_models import REDIRECT_MAP, redirect_for_role
from utils import session_manager

DASHBOARD_TITLES = {
    "/admin_dashboard": "🛠 Admin Dashboard",
    "/beginner_dashboard": "🌱 Amateur Dashboard",
    "/professional_dashboard": "💼 Professional Dashboard",
    "/institut_dashboard": "🏛 Institution Dashboard",
    "/dashboard": "📊 Dashboard",
}


def render_dashboard(path, role):
    # Dashboard content is served by separate components; this view only frames it.
    st.title(DASHBOARD_TITLES.get(path, "📊 Dashboard"))
    st.caption(f"Signed in as {role or 'member'}")

    if path == "/dashboard" and role in REDIRECT_MAP:
        if st.button("Open my dashboard"):
            session_manager.navigate(redirect_for_role(role))

    if st.button("Log out", type="secondary", disabled=st.session_state.auth_pending):
        session_manager.logout()


def render_home(credentials):
    st.title("🎓 Mentorship Platform")
    st.write("Connect with professionals and amateurs. Share knowledge, grow skills, and build networks.")

    if credentials is None:
        col_login, col_signup = st.columns(2)
        if col_login.button("Sign In", use_container_width=True):
            session_manager.navigate("/login")
        if col_signup.button("Create Account", type="primary", use_container_width=True):
            session_manager.navigate("/signup")
        return

    if st.button("Go to my dashboard", type="primary"):
        session_manager.navigate(redirect_for_role(credentials.role))
    if st.button("Log out", disabled=st.session_state.auth_pending):
        session_manager.logout()
