"""
Pytest configuration and shared fixtures for the board tests.
"""

import os

os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_KEY", "anon-test-key")
os.environ.setdefault("RATE_LIMIT", "1000/minute")
os.environ.setdefault("SESSION_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from vtboard.core.rate_limit import limiter
from vtboard.database.supabase_client import get_supabase
from vtboard.main import app
from tests.fakes import FakeSupabase


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def client(supabase: FakeSupabase):
    """
    Test client whose requests all talk to the in-memory Supabase fake.
    """
    def override_get_supabase():
        # A real client is built per request; drop listeners from earlier requests.
        supabase.auth.subscribers.clear()
        return supabase

    app.dependency_overrides[get_supabase] = override_get_supabase
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def sign_in(client: TestClient, supabase: FakeSupabase, user_id="user-1", email="alice@example.com", metadata=None):
    user = supabase.auth.users.get(user_id) or supabase.auth.add_user(
        user_id, email, {"name": "Alice"} if metadata is None else metadata
    )
    response = client.get(
        "/auth/callback", params={"code": supabase.auth.issue_code(user)}, follow_redirects=False
    )
    assert response.status_code == 303
    return user


@pytest.fixture
def login(client: TestClient, supabase: FakeSupabase):
    """
    Sign the test client in through the OAuth callback.
    """
    def _login(user_id="user-1", email="alice@example.com", metadata=None):
        return sign_in(client, supabase, user_id, email, metadata)
    return _login


@pytest.fixture
def alice(login):
    return login()
