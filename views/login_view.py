import streamlit as st

import auth
import ui
from infrastructure.api.backend_client import BackendError
from infrastructure.storage.browser_storage import restore_cookies_from_local_storage
from use_cases.auth_flow import post_login_destination
from use_cases.session_models import LOGIN_PATH, SELF_REGISTRABLE_ROLES
from utils import session_manager


def _finish_sign_in(redirect_url):
    destination = post_login_destination(
        auth.get_credential_store(),
        redirect_url,
        session_manager.pop_attempted_path(),
    )
    session_manager.reset_route_guard()
    session_manager.navigate(destination)


def _submit(action, *args):
    """Runs a login/register call with the form locked; returns None after showing an error."""
    st.session_state.auth_pending = True
    try:
        return action(auth.get_backend_client(), auth.get_credential_store(), *args)
    except auth.ValidationError as e:
        st.error(str(e))
    except BackendError as e:
        st.error(ui.error_message(e))
    finally:
        st.session_state.auth_pending = False
    return None


def _render_login_form():
    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email Address", placeholder="Enter your email")
        password = st.text_input("Password", type="password", placeholder="Enter your password")
        submitted = st.form_submit_button("Sign In", disabled=st.session_state.auth_pending)

    if submitted:
        result = _submit(auth.login, email, password)
        if result is not None:
            _finish_sign_in(result.redirect_url)

    if st.button("Forgot password?"):
        session_manager.navigate("/forgot-password")


def _render_register_form():
    with st.form("register_form", clear_on_submit=False):
        user_type = st.radio(
            "Account Type",
            SELF_REGISTRABLE_ROLES,
            format_func=str.capitalize,
            horizontal=True,
        )
        full_name = st.text_input("Full Name *")
        username = st.text_input("Username *")
        phone_number = st.text_input("Phone Number *")
        email = st.text_input("Email Address *")
        password = st.text_input("Password *", type="password")
        password2 = st.text_input("Confirm Password *", type="password")
        submitted = st.form_submit_button("Create Account", disabled=st.session_state.auth_pending)

    if not submitted:
        return

    form = {
        "email": email,
        "password": password,
        "password2": password2,
        "user_type": user_type,
        "phone_number": phone_number,
        "username": username,
        "full_name": full_name,
    }
    result = _submit(auth.register, form)
    if result is None:
        return

    if result.data.get("token"):
        _finish_sign_in(result.redirect_url)
    else:
        # Some accounts are created without a session; they sign in separately.
        session_manager.set_flash("success", "✅ Account created. Sign in to continue.")
        session_manager.navigate(LOGIN_PATH)


def render_auth_screen(is_sign_up=False):
    # A logout waiting to be written must not be undone from localStorage.
    if not auth.get_credential_store().sync_pending():
        restore_cookies_from_local_storage()

    st.title("🎓 Join Our Community" if is_sign_up else "🎓 Welcome Back")
    st.caption("Connect with professionals and amateurs. Share knowledge, grow skills, and build networks.")

    if is_sign_up:
        tab_register, tab_login = st.tabs(["Create Account", "Sign In"])
    else:
        tab_login, tab_register = st.tabs(["Sign In", "Create Account"])

    with tab_login:
        _render_login_form()

    with tab_register:
        _render_register_form()
