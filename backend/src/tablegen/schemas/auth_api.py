"""API schemas for authentication."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from tablegen.core.session import SessionUser


class CredentialsRequest(BaseModel):
    """Email and password, as entered in the login modal."""

    email: EmailStr
    password: str = Field(..., min_length=6)


class AuthResponse(BaseModel):
    """Schema returned after signing in or up.

    Tokens are absent when sign-up still awaits email confirmation.
    ``is_auth_loading`` and ``loading`` mirror the session flags once the
    call has returned.
    """

    user: Optional[SessionUser] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    is_auth_loading: bool = False
    loading: bool = False
