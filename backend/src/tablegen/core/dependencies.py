"""Dependencies for the application using FastAPI app state for singletons."""

import logging
from typing import Any, Iterator

from fastapi import Depends, Request

from tablegen.core.config import Settings, get_settings
from tablegen.core.session import AuthSession
from tablegen.database.supabase_client import create_auth_client
from tablegen.services.table_generation_service import TableGenerationService
from tablegen.services.table_service import TableService

logger = logging.getLogger(__name__)


def get_table_generation_service(request: Request) -> TableGenerationService:
    """Get the table generation service from application state."""
    if not hasattr(request.app.state, "table_generation_service"):
        raise ValueError("Table generation service not initialized in application state")

    return request.app.state.table_generation_service


def get_table_service(request: Request) -> TableService:
    """Get the saved-table service from application state."""
    if not hasattr(request.app.state, "table_service"):
        raise ValueError("Table service not initialized in application state")

    return request.app.state.table_service


def get_auth_client(settings: Settings = Depends(get_settings)) -> Any:
    """Get a fresh Supabase auth client for this request."""
    return create_auth_client(settings).auth


def get_auth_session(auth_client: Any = Depends(get_auth_client)) -> Iterator[AuthSession]:
    """Yield a session mounted on ``auth_client`` for the request's duration."""
    session = AuthSession(auth_client)
    session.mount()
    try:
        yield session
    finally:
        session.unmount()
