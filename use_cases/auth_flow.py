"""Authentication flow orchestration (application layer)."""

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from use_cases import route_policy
from use_cases.route_policy import AccessOutcome
from use_cases.session_models import HOME_PATH, redirect_for_role
from use_cases.session_verifier import SessionVerificationError, SessionVerifier

log = logging.getLogger(__name__)

AuthFlowStatus = Literal["CONTINUE", "STOP"]
GuardState = Literal["checking", "allowed", "redirecting"]


@dataclass(frozen=True)
class AuthFlowResult:
    """Result contract for route access orchestration."""

    status: AuthFlowStatus
    reason: str
    redirect_to: Optional[str] = None
    role: Optional[str] = None


class RouteGuard:
    """
    Guards one mounted view.

    The check runs once per (path, required role) pair: a rerun with the same pair
    reuses the previous outcome, a new pair goes back to ``checking``.
    """

    def __init__(self, store, verifier: SessionVerifier):
        self.store = store
        self.verifier = verifier
        self.state: GuardState = "checking"
        self._key: Optional[Tuple[str, Optional[str]]] = None
        self._outcome: Optional[AccessOutcome] = None

    def needs_check(self, path: str, required_role: Optional[str]) -> bool:
        return self._key != (path, required_role) or self.state == "checking"

    def resolve(self, path: str, required_role: Optional[str]) -> AccessOutcome:
        if not self.needs_check(path, required_role):
            return self._outcome

        self._key = (path, required_role)
        self.state = "checking"
        outcome = self._evaluate(required_role)
        self._outcome = outcome
        self.state = "allowed" if outcome is AccessOutcome.ALLOW else "redirecting"
        return outcome

    def reset(self) -> None:
        self.state = "checking"
        self._key = None
        self._outcome = None

    def _evaluate(self, required_role: Optional[str]) -> AccessOutcome:
        outcome = route_policy.decide(required_role, self.store.read())
        if outcome is not AccessOutcome.ALLOW:
            return outcome

        try:
            self.verifier.verify()
        except SessionVerificationError:
            # Fail closed: a rejected or unreachable verification is a logged-out visitor.
            self.store.clear()
            return AccessOutcome.REDIRECT_LOGIN
        return AccessOutcome.ALLOW


def ensure_route_access(path: str, guard: RouteGuard) -> AuthFlowResult:
    """Run route-gate orchestration and return a control-flow status."""
    if not route_policy.is_known_path(path):
        guard.reset()
        return AuthFlowResult(status="STOP", reason="unknown_route", redirect_to=HOME_PATH)

    required_role = route_policy.required_role_for(path)
    if not route_policy.requires_session(required_role):
        # The protected view is no longer mounted; coming back to it checks again.
        guard.reset()
        return AuthFlowResult(status="CONTINUE", reason="public")

    outcome = guard.resolve(path, required_role)
    if outcome is AccessOutcome.REDIRECT_LOGIN:
        return AuthFlowResult(status="STOP", reason="auth_required", redirect_to=outcome.target)
    if outcome is AccessOutcome.REDIRECT_HOME:
        return AuthFlowResult(status="STOP", reason="role_mismatch", redirect_to=outcome.target)

    credentials = guard.store.read()
    role = credentials.role if credentials is not None else None
    return AuthFlowResult(status="CONTINUE", reason="authenticated", role=role)


def post_login_destination(store, default_url: str, attempted_path: Optional[str]) -> str:
    """Send the visitor back to the page that bounced them to login, if their role allows it."""
    if attempted_path and route_policy.can_open(attempted_path, store.read()):
        return attempted_path
    return default_url or redirect_for_role(None)
