"""API endpoints for generating, exporting and saving tables."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from tablegen.core.auth import jwt_auth
from tablegen.core.config import get_settings
from tablegen.core.dependencies import get_table_generation_service, get_table_service
from tablegen.core.session import SessionUser
from tablegen.models.table import GeneratedTable, StoredTable, TableGenerationParams
from tablegen.schemas.table_api import (
    StoredTableListResponse,
    StoredTableResponse,
    TableExportRequest,
    TableGenerateResponse,
    TableSaveRequest,
)
from tablegen.services.csv_export import csv_filename, table_to_csv
from tablegen.services.table_generation_service import (
    TableGenerationError,
    TableGenerationService,
)
from tablegen.services.table_service import SaveLimitReachedError, TableService

# Set up logging
logger = logging.getLogger(__name__)

# Get settings
settings = get_settings()

# Create router
router = APIRouter()


def _persistence_error(message: str, error: Exception) -> HTTPException:
    """Convert a store error into the message shown for the failed action."""
    logger.error(f"{message}: {error}")
    detail = message if settings.is_production else f"{message}: {error}"
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail
    )


def _stored_table_response(stored: StoredTable) -> StoredTableResponse:
    return StoredTableResponse(
        id=stored.id,
        params=stored.params,
        table=stored.table,
        created_at=stored.created_at,
    )


def _csv_response(title: str, table: GeneratedTable) -> Response:
    return Response(
        content=table_to_csv(table),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{csv_filename(title)}"'
        },
    )


@router.post(
    "/generate",
    response_model=TableGenerateResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate a table",
    description="Generate a table from the form parameters.",
)
async def generate_table(
    params: TableGenerationParams,
    generation_service: TableGenerationService = Depends(get_table_generation_service),
) -> TableGenerateResponse:
    """Generate a table."""
    try:
        table = await generation_service.generate_table(params)
    except TableGenerationError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        )

    return TableGenerateResponse(params=params, table=table)


@router.post(
    "/export",
    status_code=status.HTTP_200_OK,
    summary="Export a table as CSV",
    description="Render the given table as a downloadable CSV file.",
)
async def export_table(request: TableExportRequest) -> Response:
    """Export a table as CSV."""
    return _csv_response(request.title, request.table)


@router.get(
    "",
    response_model=StoredTableListResponse,
    status_code=status.HTTP_200_OK,
    summary="List saved tables",
    description="List the most recently saved tables of the current user.",
)
async def list_tables(
    user: SessionUser = Depends(jwt_auth),
    table_service: TableService = Depends(get_table_service),
) -> StoredTableListResponse:
    """List saved tables."""
    try:
        tables = table_service.list_recent_tables(user)
    except Exception as e:
        raise _persistence_error("Error fetching tables", e)

    return StoredTableListResponse(
        items=[_stored_table_response(stored) for stored in tables],
        limit=table_service.max_saved_tables,
    )


@router.post(
    "",
    response_model=StoredTableResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a table",
    description="Save a generated table for the current user.",
)
async def save_table(
    request: TableSaveRequest,
    user: SessionUser = Depends(jwt_auth),
    table_service: TableService = Depends(get_table_service),
) -> StoredTableResponse:
    """Save a table."""
    try:
        stored = table_service.save_table(user, request.params, request.table)
    except SaveLimitReachedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        raise _persistence_error("Error saving table", e)

    return _stored_table_response(stored)


def _load_table(table_service: TableService, user: SessionUser, table_id: str) -> StoredTable:
    try:
        stored = table_service.get_table(user, table_id)
    except Exception as e:
        raise _persistence_error("Error loading table", e)

    if stored is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Table with ID {table_id} not found",
        )
    return stored


@router.get(
    "/{table_id}",
    response_model=StoredTableResponse,
    status_code=status.HTTP_200_OK,
    summary="Load a saved table",
    description="Load one saved table of the current user.",
)
async def get_table(
    table_id: str = Path(..., description="The ID of the table to load"),
    user: SessionUser = Depends(jwt_auth),
    table_service: TableService = Depends(get_table_service),
) -> StoredTableResponse:
    """Load a saved table."""
    return _stored_table_response(_load_table(table_service, user, table_id))


@router.get(
    "/{table_id}/export",
    status_code=status.HTTP_200_OK,
    summary="Export a saved table as CSV",
    description="Render one saved table of the current user as a CSV file.",
)
async def export_saved_table(
    table_id: str = Path(..., description="The ID of the table to export"),
    user: SessionUser = Depends(jwt_auth),
    table_service: TableService = Depends(get_table_service),
) -> Response:
    """Export a saved table as CSV."""
    stored = _load_table(table_service, user, table_id)
    return _csv_response(stored.params.title, stored.table)


@router.delete(
    "/{table_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a saved table",
    description="Delete one saved table of the current user.",
)
async def delete_table(
    table_id: str = Path(..., description="The ID of the table to delete"),
    user: SessionUser = Depends(jwt_auth),
    table_service: TableService = Depends(get_table_service),
) -> None:
    """Delete a saved table."""
    try:
        deleted = table_service.delete_table(user, table_id)
    except Exception as e:
        raise _persistence_error("Error deleting table", e)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Table with ID {table_id} not found",
        )
