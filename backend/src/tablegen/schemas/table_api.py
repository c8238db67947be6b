"""API schemas for table operations."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from tablegen.models.table import GeneratedTable, TableGenerationParams


class TableGenerateResponse(BaseModel):
    """Schema for a freshly generated table."""

    params: TableGenerationParams
    table: GeneratedTable


class TableSaveRequest(BaseModel):
    """Schema for saving a generated table."""

    params: TableGenerationParams
    table: GeneratedTable


class TableExportRequest(BaseModel):
    """Schema for exporting a table as CSV."""

    title: str = Field(..., min_length=1)
    table: GeneratedTable


class StoredTableResponse(BaseModel):
    """Schema for a saved table."""

    id: str
    params: TableGenerationParams
    table: GeneratedTable
    created_at: datetime


class StoredTableListResponse(BaseModel):
    """Schema for listing saved tables."""

    items: List[StoredTableResponse]
    limit: int
