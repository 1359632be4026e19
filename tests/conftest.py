import pytest
from unittest.mock import MagicMock, patch

import streamlit as st

from infrastructure.storage.credential_store import BrowserCredentialStore


class SessionStateStub(dict):
    """Attribute-style dict standing in for st.session_state outside `streamlit run`."""

    def __getattr__(self, key):
        try:
            return self[key]
        except KeyError as e:
            raise AttributeError(key) from e

    def __setattr__(self, key, value):
        self[key] = value

    def __delattr__(self, key):
        del self[key]


@pytest.fixture
def session_state():
    state = SessionStateStub()
    with patch.object(st, "session_state", state), patch.object(st, "query_params", {}):
        yield state


@pytest.fixture
def browser_writer():
    return MagicMock()


@pytest.fixture
def store(browser_writer):
    return BrowserCredentialStore({}, {}, writer=browser_writer)


@pytest.fixture
def new_session_state():
    """Factory for independent browser sessions."""
    return SessionStateStub
