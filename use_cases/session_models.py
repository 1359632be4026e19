"""Session DTOs shared across application layers."""

from dataclasses import dataclass
from typing import Dict, Literal, Optional

Role = Literal["admin", "amateur", "professional", "institution"]

ROLES = ("admin", "amateur", "professional", "institution")
SELF_REGISTRABLE_ROLES = ("amateur", "professional", "institution")

LOGIN_PATH = "/login"
HOME_PATH = "/"

REDIRECT_MAP: Dict[str, str] = {
    "admin": "/admin_dashboard",
    "amateur": "/beginner_dashboard",
    "professional": "/professional_dashboard",
    "institution": "/institut_dashboard",
}


@dataclass(frozen=True)
class StoredCredentials:
    token: str
    refresh_token: Optional[str] = None
    role: Optional[str] = None


def redirect_for_role(role: Optional[str]) -> str:
    """Landing path for a role; unknown or missing roles go to the login view."""
    if not role:
        return LOGIN_PATH
    return REDIRECT_MAP.get(role, LOGIN_PATH)
