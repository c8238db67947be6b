"""Authentication endpoints for the API."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from tablegen.core.auth import jwt_auth
from tablegen.core.dependencies import get_auth_session
from tablegen.core.session import AuthSession, SessionUser
from tablegen.schemas.auth_api import AuthResponse, CredentialsRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(session: AuthSession, response: Any) -> AuthResponse:
    """Build the response from the session, falling back to the call's result."""
    user = session.user
    if user is None and getattr(response, "user", None) is not None:
        user = SessionUser.from_auth_user(response.user)

    auth_session = getattr(response, "session", None)
    return AuthResponse(
        user=user,
        access_token=getattr(auth_session, "access_token", None),
        refresh_token=getattr(auth_session, "refresh_token", None),
        is_auth_loading=session.is_auth_loading,
        loading=session.loading,
    )


@router.post("/sign-up", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    credentials: CredentialsRequest,
    session: AuthSession = Depends(get_auth_session),
) -> AuthResponse:
    """Create an account with email and password.

    Raises:
        HTTPException: If the auth service rejects the sign-up.
    """
    try:
        response = session.sign_up(credentials.email, credentials.password)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e) or "Sign up failed",
        )

    return _auth_response(session, response)


@router.post("/sign-in", response_model=AuthResponse)
async def sign_in(
    credentials: CredentialsRequest,
    session: AuthSession = Depends(get_auth_session),
) -> AuthResponse:
    """Sign in with email and password and return the session tokens.

    Raises:
        HTTPException: If the credentials are rejected.
    """
    try:
        response = session.sign_in(credentials.email, credentials.password)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e) or "Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _auth_response(session, response)


@router.post("/sign-out")
async def sign_out(
    request: Request,
    _: SessionUser = Depends(jwt_auth),
    session: AuthSession = Depends(get_auth_session),
) -> dict:
    """Sign out and revoke the bearer token."""
    try:
        session.sign_out(getattr(request.state, "access_token", None))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e) or "Sign out failed",
        )

    return {"message": "Signed out successfully"}


@router.get("/me", response_model=SessionUser)
async def me(user: SessionUser = Depends(jwt_auth)) -> SessionUser:
    """Return the user the bearer token was issued to."""
    return user
