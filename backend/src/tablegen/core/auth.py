"""Authentication module for the application.

Bearer tokens are Supabase access tokens. This module verifies them locally
with the project's JWT secret and exposes the token's user as a
``SessionUser``.
"""

import time
from typing import Dict, Optional

import jwt
from fastapi import HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tablegen.core.config import get_settings
from tablegen.core.session import SessionUser

# Get settings
settings = get_settings()

JWT_SECRET = settings.supabase_jwt_secret
JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = "authenticated"


def decode_token(token: str) -> Optional[Dict]:
    """Decode and validate a Supabase access token.

    Args:
        token: The JWT token to decode.

    Returns:
        Optional[Dict]: The decoded token payload if valid, None otherwise.
    """
    if not JWT_SECRET:
        return None

    try:
        payload = jwt.decode(
            token, JWT_SECRET, algorithms=[JWT_ALGORITHM], audience=JWT_AUDIENCE
        )

        if payload.get("exp", 0) < time.time() or not payload.get("sub"):
            return None

        return payload
    except jwt.PyJWTError:
        return None


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication."""

    def __init__(self, auto_error: bool = True):
        super(JWTBearer, self).__init__(auto_error=auto_error)

    async def __call__(self, request: Request) -> SessionUser:
        """Validate the JWT token in the Authorization header.

        Args:
            request: The FastAPI request object.

        Returns:
            SessionUser: The user the token was issued to.

        Raises:
            HTTPException: If the token is invalid or missing.
        """
        credentials: HTTPAuthorizationCredentials = await super(JWTBearer, self).__call__(request)

        if not credentials:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid authorization credentials."
            )

        if not credentials.scheme == "Bearer":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid authentication scheme."
            )

        payload = decode_token(credentials.credentials)
        if payload is None:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid or expired token."
            )

        request.state.access_token = credentials.credentials
        return SessionUser(uid=payload["sub"], email=payload.get("email"))


# Dependency for protected routes
jwt_auth = JWTBearer()
