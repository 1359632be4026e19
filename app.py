import sentry_sdk
import streamlit as st

from infrastructure.observability import setup_observability
setup_observability()

import auth
import ui
from use_cases import auth_flow, bootstrap, route_policy
from use_cases.session_models import LOGIN_PATH
from utils import session_manager
from views import dashboard_view, login_view, password_reset_view

# --- PAGE SETTINGS ---
st.set_page_config(page_title="Mentorship Platform", page_icon="🎓", layout="centered")

ui.setup_style()

# --- STARTUP ORCHESTRATION ---
startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.stop()

path = session_manager.get_current_path()

# Leaving the recovery view destroys its flow (and its cooldown).
if not session_manager.is_recovery_path(path):
    session_manager.unmount_recovery_flow()

ui.render_flash(session_manager.pop_flash())

# --- ROUTE GATE ---
guard_slot = st.empty()
guard = session_manager.get_route_guard()
required_role = route_policy.required_role_for(path)
if route_policy.requires_session(required_role) and guard.needs_check(path, required_role):
    ui.render_checking_placeholder(guard_slot)
route_result = auth_flow.ensure_route_access(path, guard)
guard_slot.empty()

if route_result.status == "STOP":
    if route_result.redirect_to == LOGIN_PATH:
        session_manager.remember_attempted_path(path)
    session_manager.navigate(route_result.redirect_to)
    st.stop()

# Attach the role to Sentry events of this session
if route_result.role and sentry_sdk.get_client().is_active():
    sentry_sdk.set_user({"role": route_result.role})

# --- VIEWS ---
if path == "/":
    dashboard_view.render_home(auth.get_credential_store().read())
elif path == "/login":
    login_view.render_auth_screen()
elif path == "/signup":
    login_view.render_auth_screen(is_sign_up=True)
elif session_manager.is_recovery_path(path):
    password_reset_view.render_password_reset(path)
else:
    dashboard_view.render_dashboard(path, route_result.role)

# --- BROWSER SYNC ---
# Runs after the view so that a login or logout from this run reaches the browser.
auth.get_credential_store().flush()
