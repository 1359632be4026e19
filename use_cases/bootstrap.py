"""Startup orchestration for application bootstrap."""

import logging
from dataclasses import dataclass
from typing import Literal, Tuple

import auth
from utils import session_manager

log = logging.getLogger(__name__)

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]


def run_startup() -> StartupResult:
    """Prepare shared resources and per-session state before routing."""
    executed_steps = []

    # Picks up credentials the browser kept from an earlier visit.
    auth.get_credential_store().read()
    executed_steps.append("init_credential_store")

    auth.get_backend_client()
    executed_steps.append("init_backend_client")

    session_manager.init_session_state()
    executed_steps.append("init_session_state")

    if not session_manager.st.session_state.startup_logged:
        log.info(f"Mentor portal client started (API: {auth.get_api_base_url()})")
        session_manager.st.session_state.startup_logged = True
        executed_steps.append("log_startup")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
