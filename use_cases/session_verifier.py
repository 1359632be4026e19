"""Backend session verification with in-flight de-duplication."""

import logging
import threading
from concurrent.futures import Future
from typing import Optional

from infrastructure.api.backend_client import BackendClient, BackendError

log = logging.getLogger(__name__)


class SessionVerificationError(Exception):
    pass


class SessionVerifier:
    """
    Asks the backend whether the stored bearer token is still valid.

    While one verification is in flight, every other caller waits on the same
    future and gets the same outcome. The slot is emptied once the call settles.
    The verifier never touches the credential store; callers clear it on failure.
    """

    def __init__(self, store, client: BackendClient):
        self.store = store
        self.client = client
        self._lock = threading.Lock()
        self._in_flight: Optional[Future] = None

    def verify(self) -> None:
        with self._lock:
            pending = self._in_flight
            owner = pending is None
            if owner:
                pending = Future()
                self._in_flight = pending

        if owner:
            try:
                self._run_check()
            except SessionVerificationError as e:
                pending.set_exception(e)
            except Exception as e:
                # Fail closed: anything unexpected counts as an invalid session.
                log.exception("Unexpected error during session verification")
                pending.set_exception(SessionVerificationError(str(e)))
            except BaseException:
                # Interrupted run: waiters still get an answer before the interrupt propagates.
                pending.set_exception(SessionVerificationError("Session verification interrupted"))
                raise
            else:
                pending.set_result(None)
            finally:
                with self._lock:
                    self._in_flight = None

        # Raises the shared SessionVerificationError for every caller.
        pending.result()

    def _run_check(self) -> None:
        credentials = self.store.read()
        if credentials is None:
            raise SessionVerificationError("No session token stored")
        try:
            self.client.verify_session(credentials.token)
        except BackendError as e:
            log.info(f"Session verification failed: {e}")
            raise SessionVerificationError(str(e)) from e
