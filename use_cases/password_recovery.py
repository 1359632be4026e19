"""Password recovery flow: request code -> verify code -> set new password -> done."""

import logging
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict

from infrastructure.api.backend_client import BackendClient, BackendError, BackendRejectedError
from use_cases.cooldown import DEFAULT_COOLDOWN_SECONDS, CooldownTimer
from use_cases.otp_input import OtpInput

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

TRANSPORT_ERROR_MESSAGE = "Could not reach the server. Check your connection and try again."
MISSING_EMAIL_MESSAGE = "Enter the email address the code was sent to."


class Stage(str, Enum):
    FORGOT = "forgot"
    VERIFY = "verify"
    RESET = "reset"
    SUCCESS = "success"


class InvalidTransitionError(Exception):
    pass


_FORWARD: Dict[Stage, Stage] = {
    Stage.FORGOT: Stage.VERIFY,
    Stage.VERIFY: Stage.RESET,
    Stage.RESET: Stage.SUCCESS,
}

_BACK: Dict[Stage, Stage] = {
    Stage.VERIFY: Stage.FORGOT,
    Stage.RESET: Stage.VERIFY,
}


def advance(stage: Stage) -> Stage:
    try:
        return _FORWARD[stage]
    except KeyError:
        raise InvalidTransitionError(f"No stage after {stage.value}") from None


def go_back(stage: Stage) -> Stage:
    try:
        return _BACK[stage]
    except KeyError:
        raise InvalidTransitionError(f"Cannot go back from {stage.value}") from None


def can_go_back(stage: Stage) -> bool:
    return stage in _BACK


@dataclass(frozen=True)
class PasswordChecks:
    length: bool
    has_digit: bool
    mixed_case: bool

    @classmethod
    def from_password(cls, password: str) -> "PasswordChecks":
        return cls(
            length=len(password) >= MIN_PASSWORD_LENGTH,
            has_digit=re.search(r"[0-9]", password) is not None,
            mixed_case=re.search(r"[a-z]", password) is not None and re.search(r"[A-Z]", password) is not None,
        )

    def passed(self) -> int:
        return sum((self.length, self.has_digit, self.mixed_case))

    def all_passed(self) -> bool:
        return self.passed() == 3


def password_strength(checks: PasswordChecks) -> str:
    """Display label only; submission is gated by the checks themselves."""
    passed = checks.passed()
    if passed == 0:
        return "very weak"
    ratio = passed * 100 // 3
    if ratio <= 33:
        return "weak"
    if ratio <= 66:
        return "medium"
    return "strong"


class PasswordRecoveryFlow:
    """
    One mounted recovery view.

    Only this class changes ``stage``; the OTP manager only touches the code cells.
    Backend failures leave the stage where it was and set that stage's error.
    After ``dispose()`` late network results are dropped and the cooldown stops.
    """

    def __init__(
        self,
        client: BackendClient,
        stage: Stage = Stage.FORGOT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.stage = Stage(stage)
        self.email = ""
        self.otp = OtpInput()
        self.new_password = ""
        self.confirm_password = ""
        self.password_checks = PasswordChecks.from_password("")
        self.cooldown = CooldownTimer(clock)
        self.errors: Dict[Stage, str] = {}
        self.message = ""
        self.pending = False
        self.disposed = False

    @property
    def code(self):
        return self.otp.cells

    @property
    def cooldown_seconds(self) -> int:
        return self.cooldown.remaining

    @property
    def error(self) -> str:
        return self.errors.get(self.stage, "")

    @property
    def strength(self) -> str:
        return password_strength(self.password_checks)

    def set_email(self, email: str) -> None:
        self.email = email

    def set_new_password(self, value: str) -> None:
        self.new_password = value
        self.password_checks = PasswordChecks.from_password(value)

    def set_confirm_password(self, value: str) -> None:
        self.confirm_password = value

    def can_submit_password(self) -> bool:
        return (
            self.password_checks.all_passed()
            and bool(self.confirm_password)
            and self.new_password == self.confirm_password
        )

    def can_resend(self) -> bool:
        return self.stage is Stage.VERIFY and not self.cooldown.is_active() and not self.pending

    def submit_email(self) -> bool:
        if self.stage is not Stage.FORGOT:
            return False
        email = self.email.strip()
        if not email:
            self.errors[Stage.FORGOT] = "Please enter your email address."
            return False

        if not self._run(Stage.FORGOT, lambda: self.client.request_password_reset(email)):
            return False
        self.email = email
        # A fresh code makes whatever was typed for the previous one meaningless.
        self.otp.reset()
        self.stage = advance(Stage.FORGOT)
        self.cooldown.start(DEFAULT_COOLDOWN_SECONDS)
        self.message = f"We've sent a 6-digit code to {email}."
        return True

    def _require_email(self, stage: Stage) -> bool:
        # Mounted past the first stage, the flow may not know the email yet.
        if self.email.strip():
            return True
        self.errors[stage] = MISSING_EMAIL_MESSAGE
        return False

    def resend_code(self) -> bool:
        if not self.can_resend():
            return False
        if not self._require_email(Stage.VERIFY):
            return False
        email = self.email.strip()
        if not self._run(Stage.VERIFY, lambda: self.client.request_password_reset(email)):
            return False
        self.cooldown.start(DEFAULT_COOLDOWN_SECONDS)
        self.message = f"A new code has been sent to {email}."
        return True

    def submit_code(self) -> bool:
        if self.stage is not Stage.VERIFY:
            return False
        if not self._require_email(Stage.VERIFY):
            return False
        if not self.otp.is_complete():
            self.errors[Stage.VERIFY] = "Enter all 6 digits of the code."
            return False

        code = self.otp.joined()
        if not self._run(Stage.VERIFY, lambda: self.client.verify_reset_code(self.email, code)):
            return False
        self.stage = advance(Stage.VERIFY)
        self.message = ""
        return True

    def submit_new_password(self) -> bool:
        if self.stage is not Stage.RESET:
            return False
        if not self.password_checks.all_passed():
            self.errors[Stage.RESET] = "Password does not meet all requirements."
            return False
        if not self.confirm_password:
            self.errors[Stage.RESET] = "Please confirm your new password."
            return False
        if self.new_password != self.confirm_password:
            self.errors[Stage.RESET] = "Passwords do not match."
            return False
        if not self._require_email(Stage.RESET):
            return False
        if not self.otp.is_complete():
            self.errors[Stage.RESET] = "Enter the 6-digit code from the email first."
            return False

        code = self.otp.joined()
        if not self._run(
            Stage.RESET,
            lambda: self.client.confirm_password_reset(
                self.email, code, self.new_password, self.confirm_password
            ),
        ):
            return False
        self.stage = advance(Stage.RESET)
        self.cooldown.cancel()
        self.message = "Your password has been reset successfully. You can now sign in."
        return True

    def back(self) -> bool:
        if not can_go_back(self.stage):
            return False
        self.errors.pop(self.stage, None)
        self.stage = go_back(self.stage)
        return True

    def dispose(self) -> None:
        self.disposed = True
        self.cooldown.cancel()

    def _run(self, stage: Stage, call: Callable[[], object]) -> bool:
        """Runs one backend call for ``stage``; True means the caller may apply its result."""
        if self.pending or self.disposed:
            return False

        self.pending = True
        self.errors.pop(stage, None)
        try:
            call()
        except BackendRejectedError as e:
            if not self.disposed:
                self.errors[stage] = str(e)
            return False
        except BackendError as e:
            log.warning(f"Password recovery call failed at stage {stage.value}: {e}")
            if not self.disposed:
                self.errors[stage] = TRANSPORT_ERROR_MESSAGE
            return False
        finally:
            self.pending = False

        if self.disposed:
            log.info(f"Dropping {stage.value} result: recovery view already closed")
            return False
        return True
