"""Mapping between the application table shape and the stored record shape.

The document store cannot hold arrays of arrays, so each row is wrapped in a
``{"cells": [...]}`` record on the way in and unwrapped on the way out.
Nothing here performs I/O.
"""

from typing import Any, Dict

from tablegen.models.table import (
    GeneratedTable,
    StorageTableData,
    StoredTable,
    TableGenerationParams,
    WrappedRow,
)


def to_storage_shape(table: GeneratedTable) -> StorageTableData:
    """Wrap every row of ``table``; the header is passed through unchanged."""
    return StorageTableData(
        header=table.header,
        rows=[WrappedRow(cells=row) for row in table.rows],
    )


def from_storage_shape(data: StorageTableData) -> GeneratedTable:
    """Unwrap every stored row of ``data``; the header is passed through unchanged."""
    return GeneratedTable(
        header=data.header,
        rows=[wrapped.cells for wrapped in data.rows],
    )


def to_storage_document(
    user_id: str, params: TableGenerationParams, table: GeneratedTable
) -> Dict[str, Any]:
    """Build the record written to a table store.

    ``id`` and ``created_at`` are left out, the store assigns both.
    """
    return {
        "user_id": user_id,
        "title": params.title,
        "description": params.description,
        "row_count": params.row_count,
        "item_length": params.item_length.value,
        "temperature": params.temperature,
        "table_data": to_storage_shape(table).model_dump(),
    }


def from_storage_document(doc: Dict[str, Any]) -> StoredTable:
    """Rebuild a ``StoredTable`` from a record read back from a table store."""
    params = TableGenerationParams(
        title=doc["title"],
        description=doc["description"],
        row_count=doc["row_count"],
        item_length=doc["item_length"],
        temperature=doc["temperature"],
    )
    table = from_storage_shape(StorageTableData.model_validate(doc["table_data"]))
    return StoredTable(
        id=str(doc["id"]),
        user_id=doc["user_id"],
        params=params,
        table=table,
        created_at=doc["created_at"],
    )
