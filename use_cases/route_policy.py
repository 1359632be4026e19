"""Centralized route access logic."""

import logging
from enum import Enum
from typing import Dict, Optional

from use_cases.session_models import HOME_PATH, LOGIN_PATH, StoredCredentials

log = logging.getLogger(__name__)

# Any authenticated role may open the route, but the session is still verified.
ANY_ROLE = "*"

# path -> required role; None marks a public route
ROUTE_ROLES: Dict[str, Optional[str]] = {
    "/": None,
    "/login": None,
    "/signup": None,
    "/forgot-password": None,
    "/verify-reset": None,
    "/reset-password": None,
    "/dashboard": ANY_ROLE,
    "/admin_dashboard": "admin",
    "/beginner_dashboard": "amateur",
    "/professional_dashboard": "professional",
    "/institut_dashboard": "institution",
}


class AccessOutcome(str, Enum):
    ALLOW = "ALLOW"
    REDIRECT_LOGIN = "REDIRECT_LOGIN"
    REDIRECT_HOME = "REDIRECT_HOME"

    @property
    def target(self) -> Optional[str]:
        if self is AccessOutcome.REDIRECT_LOGIN:
            return LOGIN_PATH
        if self is AccessOutcome.REDIRECT_HOME:
            return HOME_PATH
        return None


def is_known_path(path: str) -> bool:
    return path in ROUTE_ROLES


def required_role_for(path: str) -> Optional[str]:
    return ROUTE_ROLES.get(path)


def requires_session(required_role: Optional[str]) -> bool:
    return required_role is not None


def decide(required_role: Optional[str], credentials: Optional[StoredCredentials]) -> AccessOutcome:
    """
    Evaluates whether the visitor may see a view guarded by ``required_role``.
    Session freshness is not checked here; the guard verifies it separately.
    """
    if credentials is None:
        # No token always means login, whatever the route requires.
        return AccessOutcome.REDIRECT_LOGIN

    if required_role is None or required_role == ANY_ROLE:
        return AccessOutcome.ALLOW

    if credentials.role == required_role:
        return AccessOutcome.ALLOW

    log.info(f"Route denied: role {credentials.role!r} cannot open a {required_role!r} view")
    return AccessOutcome.REDIRECT_HOME


def can_open(path: str, credentials: Optional[StoredCredentials]) -> bool:
    if not is_known_path(path):
        return False
    required_role = required_role_for(path)
    if not requires_session(required_role):
        return True
    return decide(required_role, credentials) is AccessOutcome.ALLOW
