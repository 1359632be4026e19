import logging
from typing import Callable, Mapping, MutableMapping, Optional
from urllib.parse import unquote

from infrastructure.storage.browser_storage import (
    REFRESH_TOKEN_COOKIE,
    ROLE_COOKIE,
    TOKEN_COOKIE,
    write_browser_credentials,
)
from use_cases.session_models import StoredCredentials

log = logging.getLogger(__name__)

CREDENTIALS_KEY = "credentials"
SYNC_PENDING_KEY = "credentials_sync_pending"


class BrowserCredentialStore:
    """
    Credentials of one visitor.

    The current copy lives in that visitor's session state. On the first read of a
    session it is restored from the cookies the browser sent with its request.
    Writes are queued and mirrored back into the browser by ``flush()``.
    Two browser sessions never share credentials.
    """

    def __init__(
        self,
        state: MutableMapping,
        cookies: Optional[Mapping[str, str]] = None,
        writer: Callable[[Optional[StoredCredentials]], None] = write_browser_credentials,
    ):
        self.state = state
        self.cookies = cookies if cookies is not None else {}
        self.writer = writer

    def _cookie(self, name: str) -> Optional[str]:
        value = self.cookies.get(name)
        return unquote(value) if value else None

    def _restore(self) -> Optional[StoredCredentials]:
        token = self._cookie(TOKEN_COOKIE)
        if not token:
            return None
        log.info("Restored session credentials from browser cookies")
        return StoredCredentials(
            token=token,
            refresh_token=self._cookie(REFRESH_TOKEN_COOKIE),
            role=self._cookie(ROLE_COOKIE),
        )

    def read(self) -> Optional[StoredCredentials]:
        if CREDENTIALS_KEY not in self.state:
            # Restored once per session; after a clear the request cookies are stale.
            self.state[CREDENTIALS_KEY] = self._restore()
        return self.state[CREDENTIALS_KEY]

    def save(self, token: str, refresh_token: Optional[str] = None, role: Optional[str] = None) -> None:
        # A new login replaces whatever the previous session left behind.
        self.state[CREDENTIALS_KEY] = StoredCredentials(
            token=token,
            refresh_token=refresh_token or None,
            role=role or None,
        )
        self.state[SYNC_PENDING_KEY] = True

    def clear(self) -> None:
        # One assignment: callers never observe a partial clear.
        self.state[CREDENTIALS_KEY] = None
        self.state[SYNC_PENDING_KEY] = True

    def sync_pending(self) -> bool:
        return bool(self.state.get(SYNC_PENDING_KEY))

    def flush(self) -> None:
        """Writes queued changes to the browser; called once the page has finished rendering."""
        if not self.sync_pending():
            return
        self.state[SYNC_PENDING_KEY] = False
        self.writer(self.state.get(CREDENTIALS_KEY))
