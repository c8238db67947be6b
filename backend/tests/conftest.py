"""Shared fixtures for the TableGen tests."""

import time
from types import SimpleNamespace

import jwt
import pytest

from tablegen.core import auth
from tablegen.core.auth import JWT_ALGORITHM, JWT_AUDIENCE

TEST_JWT_SECRET = "test-jwt-secret"


class FakeSubscription:
    """Stands in for the auth client's subscription handle."""

    def __init__(self, client, callback):
        self.client = client
        self.callback = callback

    def unsubscribe(self):
        self.client.callbacks.remove(self.callback)


class FakeAuthClient:
    """In-memory auth client that notifies listeners like Supabase auth does."""

    def __init__(self):
        self.callbacks = []
        self.error = None
        self.revoked = []
        self.admin = SimpleNamespace(sign_out=self.revoked.append)

    def on_auth_state_change(self, callback):
        self.callbacks.append(callback)
        return FakeSubscription(self, callback)

    def notify(self, event, session):
        for callback in list(self.callbacks):
            callback(event, session)

    def _signed_in(self, email):
        if self.error is not None:
            raise self.error
        user = SimpleNamespace(id="user-1", email=email)
        session = SimpleNamespace(
            access_token="access-token", refresh_token="refresh-token", user=user
        )
        self.notify("SIGNED_IN", session)
        return SimpleNamespace(user=user, session=session)

    def sign_in_with_password(self, credentials):
        return self._signed_in(credentials["email"])

    def sign_up(self, credentials):
        return self._signed_in(credentials["email"])

    def sign_out(self):
        if self.error is not None:
            raise self.error
        self.notify("SIGNED_OUT", None)


@pytest.fixture
def fake_auth_client():
    """Create a fake auth client for testing."""
    return FakeAuthClient()


@pytest.fixture
def make_token():
    """Build Supabase-style access tokens signed with the configured secret."""

    def _make_token(sub="user-1", email="user@example.com", expires_in=3600, secret=TEST_JWT_SECRET):
        payload = {
            "sub": sub,
            "email": email,
            "aud": JWT_AUDIENCE,
            "role": "authenticated",
            "exp": int(time.time()) + expires_in,
        }
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)

    return _make_token


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    """Configure the Supabase JWT secret used to verify bearer tokens."""
    monkeypatch.setattr(auth, "JWT_SECRET", TEST_JWT_SECRET)
    return TEST_JWT_SECRET
