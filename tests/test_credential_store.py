from unittest.mock import MagicMock

from infrastructure.storage.browser_storage import REFRESH_TOKEN_COOKIE, ROLE_COOKIE, TOKEN_COOKIE
from infrastructure.storage.credential_store import BrowserCredentialStore


def test_read_empty_store_returns_none(store):
    assert store.read() is None


def test_save_and_read(store):
    store.save("token-1", "refresh-1", "professional")

    creds = store.read()
    assert creds.token == "token-1"
    assert creds.refresh_token == "refresh-1"
    assert creds.role == "professional"


def test_save_without_refresh_token(store):
    store.save("token-1", None, "amateur")

    creds = store.read()
    assert creds.token == "token-1"
    assert creds.refresh_token is None


def test_new_save_replaces_previous_session(store):
    store.save("token-1", "refresh-1", "admin")
    store.save("token-2", None, "amateur")

    creds = store.read()
    assert creds.token == "token-2"
    assert creds.refresh_token is None
    assert creds.role == "amateur"


def test_clear_removes_everything(store):
    store.save("token-1", "refresh-1", "admin")
    store.clear()
    assert store.read() is None


def test_clear_is_safe_when_empty(store):
    store.clear()
    store.clear()
    assert store.read() is None


def test_state_survives_a_new_instance_over_the_same_session():
    state = {}
    BrowserCredentialStore(state, {}, writer=MagicMock()).save("token-1", "refresh-1", "institution")

    reopened = BrowserCredentialStore(state, {}, writer=MagicMock())
    assert reopened.read().token == "token-1"


def test_separate_sessions_are_isolated():
    alice = BrowserCredentialStore({}, {}, writer=MagicMock())
    bob = BrowserCredentialStore({}, {}, writer=MagicMock())

    alice.save("alice-token", "r", "admin")

    assert bob.read() is None
    bob.clear()
    assert alice.read().token == "alice-token"


def test_first_read_restores_from_browser_cookies():
    cookies = {TOKEN_COOKIE: "tok%2Fen", REFRESH_TOKEN_COOKIE: "r", ROLE_COOKIE: "amateur"}
    store = BrowserCredentialStore({}, cookies, writer=MagicMock())

    creds = store.read()

    assert creds.token == "tok/en"
    assert creds.refresh_token == "r"
    assert creds.role == "amateur"


def test_cleared_session_ignores_stale_request_cookies():
    store = BrowserCredentialStore({}, {TOKEN_COOKIE: "old"}, writer=MagicMock())
    store.read()

    store.clear()

    assert store.read() is None


def test_flush_writes_queued_changes_once(store, browser_writer):
    store.flush()
    browser_writer.assert_not_called()

    store.save("token-1", "r", "admin")
    assert store.sync_pending() is True
    store.flush()
    store.flush()

    browser_writer.assert_called_once_with(store.read())
    assert store.sync_pending() is False


def test_flush_after_clear_wipes_browser_copy(store, browser_writer):
    store.save("token-1", "r", "admin")
    store.clear()
    store.flush()

    browser_writer.assert_called_once_with(None)
