"""
Shared pytest fixtures.

Apps are built from explicit Settings and an in-memory credential store so no
test depends on the process environment.
"""
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from math_api.config import Settings
from math_api.domain.credentials import (
    DEFAULT_RECORDS,
    CredentialRecord,
    InMemoryCredentialStore,
    hash_password,
)
from math_api.domain.tokens import issue_token
from math_api.main import create_app

TEST_SECRET = "test-secret-do-not-use"


@pytest.fixture(scope="session")
def alice_record():
    """A second account; hashing is slow so do it once per session."""
    return CredentialRecord(id=2, username="alice", password_hash=hash_password("wonderland"))


@pytest.fixture
def settings():
    return Settings(jwt_secret=TEST_SECRET)


@pytest.fixture
def store(alice_record):
    return InMemoryCredentialStore([*DEFAULT_RECORDS, alice_record])


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def make_token(settings):
    """Mint a token directly, optionally backdated."""

    def _make(username="admin", subject_id=1, age=timedelta(0), secret=None):
        return issue_token(
            subject_id=subject_id,
            username=username,
            secret=secret or settings.jwt_secret,
            issued_at=datetime.now(UTC) - age,
        )

    return _make


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token()}"}
