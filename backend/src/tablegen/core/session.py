"""Authentication session state derived from the Supabase auth client.

An ``AuthSession`` holds a read-only projection of the current user plus two
flags. It never changes the user itself: the value only moves when the auth
client sends a change notification. Instances are created per consumer and
passed in explicitly; there is no module-level session.
"""

import logging
from typing import Any, Callable, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class SessionUser(BaseModel):
    """Read-only projection of an authenticated user."""

    uid: str
    email: Optional[str] = None

    @classmethod
    def from_auth_user(cls, user: Any) -> "SessionUser":
        return cls(uid=str(user.id), email=getattr(user, "email", None))


class AuthSession:
    """Current session of one consumer of the auth client.

    ``is_auth_loading`` stays True until the first change notification
    arrives. supabase-py does not notify a listener when it registers, so on
    a fresh client the flag only clears once a sign-in, sign-up or sign-out
    call has emitted its event. ``loading`` is True while a sign-in, sign-up
    or sign-out call is in flight, independently of the session state.
    """

    def __init__(self, auth_client: Any) -> None:
        self._auth = auth_client
        self._subscription = None
        self.user: Optional[SessionUser] = None
        self.is_auth_loading = True
        self.loading = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_mounted(self) -> bool:
        return self._subscription is not None

    def mount(self) -> None:
        """Register the change listener with the auth client."""
        if self._subscription is None:
            self._subscription = self._auth.on_auth_state_change(
                self._on_auth_state_change
            )

    def unmount(self) -> None:
        """Deregister the change listener."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_auth_state_change(self, event: Any, session: Any) -> None:
        user = getattr(session, "user", None) if session else None
        self.user = SessionUser.from_auth_user(user) if user else None
        self.is_auth_loading = False
        logger.debug(f"Auth state changed: {event}")

    def _forward(self, operation: str, call: Callable[[], Any]) -> Any:
        self.loading = True
        try:
            return call()
        except Exception as e:
            logger.error(f"{operation} error: {e}")
            raise
        finally:
            self.loading = False

    def sign_in(self, email: str, password: str) -> Any:
        """Sign in with email and password."""
        response = self._forward(
            "Sign in",
            lambda: self._auth.sign_in_with_password(
                {"email": email, "password": password}
            ),
        )
        logger.info(f"Sign in successful for {email}")
        return response

    def sign_up(self, email: str, password: str) -> Any:
        """Create an account with email and password."""
        response = self._forward(
            "Sign up",
            lambda: self._auth.sign_up({"email": email, "password": password}),
        )
        logger.info(f"Sign up successful for {email}")
        return response

    def sign_out(self, access_token: Optional[str] = None) -> None:
        """Sign out, revoking ``access_token`` first when one is given."""

        def call() -> None:
            if access_token:
                self._auth.admin.sign_out(access_token)
            self._auth.sign_out()

        self._forward("Sign out", call)
        logger.info("Sign out successful")
