import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import streamlit as st
from streamlit.errors import StreamlitAPIException

from infrastructure.api.backend_client import (
    DEFAULT_TIMEOUT,
    BackendClient,
    BackendError,
    BackendRejectedError,
)
from infrastructure.storage.credential_store import BrowserCredentialStore
from use_cases.session_models import LOGIN_PATH, SELF_REGISTRABLE_ROLES, redirect_for_role
from use_cases.session_verifier import SessionVerifier

log = logging.getLogger(__name__)


class ValidationError(Exception):
    pass


class LogoutError(Exception):
    pass


DEFAULT_API_BASE_URL = "http://127.0.0.1:8000/api"

REGISTRATION_FIELDS = (
    "email",
    "password",
    "password2",
    "user_type",
    "phone_number",
    "username",
    "full_name",
)


def get_secret(key):
    try:
        value = st.secrets.get(key)
    except (FileNotFoundError, StreamlitAPIException):
        value = None
    return value if value is not None else os.getenv(key)


def get_api_base_url() -> str:
    return get_secret("API_BASE_URL") or DEFAULT_API_BASE_URL


def get_api_timeout() -> float:
    raw = get_secret("API_TIMEOUT")
    try:
        return float(raw) if raw else DEFAULT_TIMEOUT
    except (TypeError, ValueError):
        log.warning(f"Ignoring invalid API_TIMEOUT={raw!r}, using {DEFAULT_TIMEOUT}s")
        return DEFAULT_TIMEOUT


@st.cache_resource
def get_backend_client() -> BackendClient:
    return BackendClient(get_api_base_url(), timeout=get_api_timeout())


def get_credential_store() -> BrowserCredentialStore:
    # Scoped to the visitor: the data lives in this browser session only.
    return BrowserCredentialStore(st.session_state, st.context.cookies)


def get_session_verifier() -> SessionVerifier:
    # One verifier per browser session so that its guards share the in-flight check.
    if st.session_state.get("session_verifier") is None:
        st.session_state.session_verifier = SessionVerifier(get_credential_store(), get_backend_client())
    return st.session_state.session_verifier


@dataclass(frozen=True)
class LoginResult:
    user_type: Optional[str]
    redirect_url: str
    data: Dict[str, Any]


@dataclass(frozen=True)
class LogoutResult:
    ok: bool
    redirect_url: str = LOGIN_PATH
    error: Optional[str] = None


def login(client: BackendClient, store, email: str, password: str) -> LoginResult:
    email = (email or "").strip()
    if not email or not password:
        raise ValidationError("Enter your email and password.")

    data = client.login(email, password)
    token = data.get("token")
    if not token:
        raise BackendRejectedError("Token not found in response")

    user_type = data.get("user_type")
    store.save(token, data.get("refresh_token"), user_type)
    log.info(f"Login succeeded (role: {user_type})")
    return LoginResult(user_type=user_type, redirect_url=redirect_for_role(user_type), data=data)


def validate_registration(form: Dict[str, Any]) -> Dict[str, str]:
    cleaned = {field: str(form.get(field) or "").strip() for field in REGISTRATION_FIELDS}
    # Passwords are sent exactly as typed.
    cleaned["password"] = str(form.get("password") or "")
    cleaned["password2"] = str(form.get("password2") or "")

    missing = [field for field in REGISTRATION_FIELDS if not cleaned[field]]
    if missing:
        raise ValidationError("Fill in all required fields.")
    if cleaned["password"] != cleaned["password2"]:
        raise ValidationError("Passwords do not match.")
    if cleaned["user_type"] not in SELF_REGISTRABLE_ROLES:
        raise ValidationError("Choose an account type.")
    return cleaned


def register(client: BackendClient, store, form: Dict[str, Any]) -> LoginResult:
    user_data = validate_registration(form)
    data = client.register(user_data)

    token = data.get("token")
    if token:
        store.save(token, data.get("refresh_token"), data.get("user_type") or user_data["user_type"])
    log.info(f"Registration succeeded (role: {user_data['user_type']}, token issued: {bool(token)})")
    return LoginResult(
        user_type=user_data["user_type"],
        redirect_url=redirect_for_role(user_data["user_type"]),
        data=data,
    )


def logout(client: BackendClient, store) -> LogoutResult:
    """
    Invalidates the session on the server, then always clears local credentials.
    Without a stored refresh token the server call is skipped and the logout fails locally.
    """
    credentials = store.read()
    try:
        if credentials is None or not credentials.refresh_token:
            raise LogoutError("No refresh token stored")
        client.logout(credentials.token, credentials.refresh_token)
    except LogoutError as e:
        log.warning(f"Logout skipped server call: {e}")
        return LogoutResult(ok=False, error=str(e))
    except BackendError as e:
        log.error(f"❌ Logout request failed: {e}")
        return LogoutResult(ok=False, error=str(e))
    finally:
        store.clear()

    log.info("Logout succeeded")
    return LogoutResult(ok=True)
