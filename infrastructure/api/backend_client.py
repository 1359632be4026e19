import logging
from typing import Any, Dict, Optional

import requests

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10

LOGIN_PATH = "login"
REGISTER_PATH = "register"
LOGOUT_PATH = "logout"
VERIFY_SESSION_PATH = "session/verify"
RESET_REQUEST_PATH = "password/reset/request"
RESET_VERIFY_PATH = "password/reset/verify"
RESET_CONFIRM_PATH = "password/reset/confirm"


class BackendError(Exception):
    """Base class for every failure talking to the mentorship API."""


class BackendRejectedError(BackendError):
    """The request reached the server and was refused."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BackendTransportError(BackendError):
    """The request could not complete (DNS, refused connection, timeout...)."""


def _extract_error(response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            value = body.get(key)
            if value:
                return str(value)
    return fallback


class BackendClient:
    """Thin JSON client for the authentication endpoints of the mentorship API."""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.strip('/')}/"

    def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
        fallback_message: str = "Request failed",
    ) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = requests.request(
                method,
                self._url(path),
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.error(f"❌ Network error on {method} {path}: {e}")
            raise BackendTransportError(f"Network error: {e}") from e

        if response.status_code >= 400:
            message = _extract_error(response, fallback_message)
            log.warning(f"⚠️ {method} {path} rejected: HTTP {response.status_code}")
            raise BackendRejectedError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            # 204 or plain-text OK responses carry nothing we need
            return {}
        return body if isinstance(body, dict) else {}

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request(
            "POST", LOGIN_PATH, {"email": email, "password": password}, fallback_message="Login failed"
        )

    def register(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", REGISTER_PATH, dict(user_data), fallback_message="Registration failed")

    def logout(self, token: str, refresh_token: str) -> Dict[str, Any]:
        return self._request(
            "POST", LOGOUT_PATH, {"refresh_token": refresh_token}, token=token, fallback_message="Logout failed"
        )

    def verify_session(self, token: str) -> Dict[str, Any]:
        return self._request("GET", VERIFY_SESSION_PATH, token=token, fallback_message="Session is not valid")

    def request_password_reset(self, email: str) -> Dict[str, Any]:
        return self._request(
            "POST", RESET_REQUEST_PATH, {"email": email}, fallback_message="Failed to send reset code"
        )

    def verify_reset_code(self, email: str, code: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            RESET_VERIFY_PATH,
            {"email": email, "code": code},
            fallback_message="Invalid verification code",
        )

    def confirm_password_reset(
        self, email: str, code: str, new_password: str, confirm_password: str
    ) -> Dict[str, Any]:
        return self._request(
            "POST",
            RESET_CONFIRM_PATH,
            {
                "email": email,
                "code": code,
                "new_password": new_password,
                "confirm_password": confirm_password,
            },
            fallback_message="Password reset failed",
        )
