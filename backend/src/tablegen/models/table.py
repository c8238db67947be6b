"""Table models for generation parameters, generated tables and stored records."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Label written over the first header cell of every generated table
HEADER_LABEL = "Number"

TEMPERATURE_STEP = 0.05


class ItemLength(str, Enum):
    """Length of the item descriptions, ordered short to long."""

    SHORT = "Short"
    SHORT_TO_MEDIUM = "Short to medium"
    MEDIUM = "Medium"
    MEDIUM_TO_LONG = "Medium to long"
    LONG = "Long"


class TableGenerationParams(BaseModel):
    """User supplied inputs for a single generation request."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., max_length=200)
    description: str = Field(..., max_length=2000)
    row_count: int = Field(5, ge=1, le=50)
    item_length: ItemLength = ItemLength.SHORT_TO_MEDIUM
    temperature: float = Field(1.0, ge=0.0, le=2.0)

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("temperature")
    @classmethod
    def on_step(cls, value: float) -> float:
        steps = value / TEMPERATURE_STEP
        if abs(steps - round(steps)) > 1e-6:
            raise ValueError(f"must be a multiple of {TEMPERATURE_STEP}")
        return round(round(steps) * TEMPERATURE_STEP, 2)


class GeneratedTable(BaseModel):
    """A table as used by the application: a header and rows of cell text."""

    header: List[str]
    rows: List[List[str]]


class WrappedRow(BaseModel):
    """One stored table row, its cells wrapped in a single-field record."""

    cells: List[str]


class StorageTableData(BaseModel):
    """A table in the shape the document store accepts."""

    header: List[str]
    rows: List[WrappedRow]


class StoredTable(BaseModel):
    """A saved table owned by a user."""

    id: str
    user_id: str
    params: TableGenerationParams
    table: GeneratedTable
    created_at: datetime


# Strict output schema for the generation request
TABLE_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "header": {
            "type": "array",
            "items": {"type": "string"},
        },
        "rows": {
            "type": "array",
            "items": {
                "type": "array",
                "items": {"type": "string"},
            },
        },
    },
    "required": ["header", "rows"],
    "additionalProperties": False,
}
