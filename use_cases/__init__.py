"""Application layer contracts for orchestrating high-level flows."""

from .auth_flow import AuthFlowResult, AuthFlowStatus, RouteGuard, ensure_route_access, post_login_destination
from .cooldown import CooldownTimer
from .otp_input import OtpInput
from .password_recovery import PasswordChecks, PasswordRecoveryFlow, Stage, password_strength
from .route_policy import AccessOutcome, decide
from .session_models import REDIRECT_MAP, Role, StoredCredentials, redirect_for_role
from .session_verifier import SessionVerificationError, SessionVerifier

__all__ = [
    "AccessOutcome",
    "AuthFlowResult",
    "AuthFlowStatus",
    "CooldownTimer",
    "OtpInput",
    "PasswordChecks",
    "PasswordRecoveryFlow",
    "REDIRECT_MAP",
    "Role",
    "RouteGuard",
    "SessionVerificationError",
    "SessionVerifier",
    "Stage",
    "StoredCredentials",
    "decide",
    "ensure_route_access",
    "password_strength",
    "post_login_destination",
    "redirect_for_role",
]
