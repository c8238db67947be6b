"""Tests for the authentication session adapter."""

from types import SimpleNamespace

import pytest

from tablegen.core.session import AuthSession, SessionUser


@pytest.fixture
def session(fake_auth_client):
    """Create a mounted session on the fake auth client."""
    session = AuthSession(fake_auth_client)
    session.mount()
    return session


def _auth_session(uid="user-1", email="user@example.com"):
    return SimpleNamespace(user=SimpleNamespace(id=uid, email=email))


def test_initial_state():
    session = AuthSession(SimpleNamespace())

    assert session.user is None
    assert session.is_auth_loading is True
    assert session.loading is False
    assert session.is_mounted is False


def test_mount_registers_one_listener(fake_auth_client, session):
    session.mount()

    assert len(fake_auth_client.callbacks) == 1
    assert session.is_mounted


def test_first_notification_clears_auth_loading(fake_auth_client, session):
    fake_auth_client.notify("INITIAL_SESSION", None)

    assert session.is_auth_loading is False
    assert session.user is None
    assert not session.is_authenticated


def test_notifications_replace_user(fake_auth_client, session):
    fake_auth_client.notify("SIGNED_IN", _auth_session())
    assert session.user == SessionUser(uid="user-1", email="user@example.com")

    fake_auth_client.notify("USER_UPDATED", _auth_session(email="new@example.com"))
    assert session.user.email == "new@example.com"

    fake_auth_client.notify("SIGNED_OUT", None)
    assert session.user is None


def test_unmount_stops_notifications(fake_auth_client, session):
    session.unmount()
    fake_auth_client.notify("SIGNED_IN", _auth_session())

    assert fake_auth_client.callbacks == []
    assert session.user is None
    assert session.is_auth_loading is True

    session.unmount()


def test_sign_in_updates_user_via_notification(fake_auth_client, session):
    response = session.sign_in("user@example.com", "secret123")

    assert response.session.access_token == "access-token"
    assert session.user == SessionUser(uid="user-1", email="user@example.com")
    assert session.is_auth_loading is False
    assert session.loading is False


def test_loading_is_set_during_call(fake_auth_client, session):
    observed = []

    def sign_up(credentials):
        observed.append(session.loading)
        return SimpleNamespace(user=None, session=None)

    fake_auth_client.sign_up = sign_up

    session.sign_up("user@example.com", "secret123")

    assert observed == [True]
    assert session.loading is False


def test_errors_are_reraised_and_loading_cleared(fake_auth_client, session):
    fake_auth_client.error = ValueError("Invalid login credentials")

    with pytest.raises(ValueError, match="Invalid login credentials"):
        session.sign_in("user@example.com", "wrong-password")

    assert session.loading is False
    assert session.user is None


def test_sign_out_revokes_token_and_clears_user(fake_auth_client, session):
    session.sign_in("user@example.com", "secret123")

    session.sign_out("access-token")

    assert fake_auth_client.revoked == ["access-token"]
    assert session.user is None


def test_sign_out_without_token(fake_auth_client, session):
    session.sign_out()

    assert fake_auth_client.revoked == []
    assert session.is_auth_loading is False
