import logging

import streamlit as st

import auth
from use_cases.auth_flow import RouteGuard
from use_cases.password_recovery import PasswordRecoveryFlow, Stage
from use_cases.session_models import HOME_PATH

log = logging.getLogger(__name__)

"""
SESSION STATE CONTRACT

This module owns the Streamlit session state of the client.

st.session_state keys:

current_path: str
    path of the view being rendered
    default: "/" (or the ?page= query parameter)
    owner: session_manager / router

next_path: str | None
    protected path that bounced the visitor to /login
    default: None
    owner: session_manager / login_view

route_guard: RouteGuard | None
    guard of the mounted protected view
    default: None
    owner: session_manager

recovery_flow: PasswordRecoveryFlow | None
    state of the mounted password recovery view
    default: None
    owner: session_manager / password_reset_view

auth_pending: bool
    a login/register/logout request is in flight; forms are disabled
    default: False
    owner: login_view

flash: tuple[str, str] | None
    (level, message) shown once on the next rendered view
    default: None
    owner: ui

credentials: StoredCredentials | None
    this visitor's token, refresh token and role; restored from browser cookies on first read
    default: unset until the first read
    owner: BrowserCredentialStore

credentials_sync_pending: bool
    credentials changed and must be written back to the browser cookies and localStorage
    default: False
    owner: BrowserCredentialStore / app (flush)

session_verifier: SessionVerifier | None
    verifier shared by the guards of this browser session
    default: None
    owner: auth

startup_logged: bool
    flag preventing the startup banner from being logged on every rerun
    default: False
    owner: system
"""

PAGE_PARAM = "page"

# Entry paths of the recovery view and the stage each one mounts at
RECOVERY_ENTRY_STAGES = {
    "/forgot-password": Stage.FORGOT,
    "/verify-reset": Stage.VERIFY,
    "/reset-password": Stage.RESET,
}


def init_session_state():
    if 'current_path' not in st.session_state:
        st.session_state.current_path = st.query_params.get(PAGE_PARAM, HOME_PATH)
    if 'next_path' not in st.session_state:
        st.session_state.next_path = None
    if 'route_guard' not in st.session_state:
        st.session_state.route_guard = None
    if 'recovery_flow' not in st.session_state:
        st.session_state.recovery_flow = None
    if 'auth_pending' not in st.session_state:
        st.session_state.auth_pending = False
    if 'flash' not in st.session_state:
        st.session_state.flash = None
    if 'startup_logged' not in st.session_state:
        st.session_state.startup_logged = False


def get_current_path() -> str:
    # The address bar wins over session state so that back/forward and bookmarks work.
    path = st.query_params.get(PAGE_PARAM)
    if path and path != st.session_state.current_path:
        st.session_state.current_path = path
    return st.session_state.current_path


def navigate(path: str, rerun: bool = True):
    st.session_state.current_path = path
    st.query_params[PAGE_PARAM] = path
    if rerun:
        st.rerun()


def remember_attempted_path(path: str):
    st.session_state.next_path = path


def pop_attempted_path():
    path = st.session_state.next_path
    st.session_state.next_path = None
    return path


def get_route_guard() -> RouteGuard:
    if st.session_state.route_guard is None:
        st.session_state.route_guard = RouteGuard(
            auth.get_credential_store(),
            auth.get_session_verifier(),
        )
    return st.session_state.route_guard


def reset_route_guard():
    if st.session_state.route_guard is not None:
        st.session_state.route_guard.reset()


def is_recovery_path(path: str) -> bool:
    return path in RECOVERY_ENTRY_STAGES


def mount_recovery_flow(path: str) -> PasswordRecoveryFlow:
    flow = st.session_state.recovery_flow
    if flow is None or flow.disposed:
        flow = PasswordRecoveryFlow(auth.get_backend_client(), stage=RECOVERY_ENTRY_STAGES.get(path, Stage.FORGOT))
        st.session_state.recovery_flow = flow
    return flow


def unmount_recovery_flow():
    flow = st.session_state.get("recovery_flow")
    if flow is not None:
        flow.dispose()
        st.session_state.recovery_flow = None


def set_flash(level: str, message: str):
    st.session_state.flash = (level, message)


def pop_flash():
    flash = st.session_state.get("flash")
    st.session_state.flash = None
    return flash


def logout():
    st.session_state.auth_pending = True
    try:
        result = auth.logout(auth.get_backend_client(), auth.get_credential_store())
    finally:
        st.session_state.auth_pending = False

    if not result.ok:
        log.info(f"Logout finished locally only: {result.error}")
    reset_route_guard()
    unmount_recovery_flow()
    st.session_state.next_path = None
    set_flash("info", "You have been signed out.")
    navigate(result.redirect_url)
