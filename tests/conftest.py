"""Shared fixtures for the test suite."""

import os

import pytest

# Settings are read at import time and the API key is mandatory.
os.environ.setdefault("OPENAI_API_KEY", "test-key")

from learnlab.crud.crud_session import SessionStore  # noqa: E402


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()
