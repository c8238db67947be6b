"""Tests for the table record shape mapping."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from tablegen.models.table import (
    GeneratedTable,
    ItemLength,
    StorageTableData,
    TableGenerationParams,
    WrappedRow,
)
from tablegen.services.table_shape import (
    from_storage_document,
    from_storage_shape,
    to_storage_document,
    to_storage_shape,
)


@pytest.fixture
def table():
    """Create a small generated table for testing."""
    return GeneratedTable(
        header=["Number", "Name", "Description"],
        rows=[
            ["1", "Sunblade", "Glows faintly at dawn"],
            ["2", "Ember Ring", "Warm to the touch"],
        ],
    )


def test_to_storage_shape_wraps_each_row(table):
    """Each row becomes a single-field record and the header is untouched."""
    data = to_storage_shape(table)

    assert data.header == table.header
    assert data.rows == [
        WrappedRow(cells=["1", "Sunblade", "Glows faintly at dawn"]),
        WrappedRow(cells=["2", "Ember Ring", "Warm to the touch"]),
    ]
    assert data.model_dump()["rows"][0] == {"cells": ["1", "Sunblade", "Glows faintly at dawn"]}


def test_from_storage_shape_unwraps_each_row():
    """Stored rows are turned back into plain lists of cells."""
    data = StorageTableData(
        header=["Number", "Name"],
        rows=[WrappedRow(cells=["1", "A"]), WrappedRow(cells=["2", "B"])],
    )

    table = from_storage_shape(data)

    assert table.header == ["Number", "Name"]
    assert table.rows == [["1", "A"], ["2", "B"]]


@pytest.mark.parametrize(
    "header,rows",
    [
        ([], []),
        (["Number"], []),
        (["Number", "Name", "Description"], [["1", "x", "y"]] * 3),
        (["a", "a"], [["dup", "dup"], ["dup", "dup"], []]),
    ],
)
def test_round_trip_is_identity(header, rows):
    """Wrapping then unwrapping gives back the same table."""
    table = GeneratedTable(header=header, rows=rows)

    assert from_storage_shape(to_storage_shape(table)) == table


def test_storage_document_round_trip(table):
    """A stored record rebuilds the parameters and the table."""
    params = TableGenerationParams(
        title="Loot",
        description="rare items",
        row_count=2,
        item_length=ItemLength.LONG,
        temperature=0.75,
    )

    doc = to_storage_document("user-1", params, table)

    assert "id" not in doc
    assert "created_at" not in doc
    assert doc["item_length"] == "Long"
    assert doc["table_data"]["rows"][1] == {"cells": ["2", "Ember Ring", "Warm to the touch"]}

    created_at = datetime(2024, 5, 1, tzinfo=timezone.utc)
    stored = from_storage_document({**doc, "id": "abc", "created_at": created_at})

    assert stored.id == "abc"
    assert stored.user_id == "user-1"
    assert stored.params == params
    assert stored.table == table
    assert stored.created_at == created_at


def test_from_storage_document_rejects_malformed_rows(table):
    """Rows that are not wrapped records are not silently accepted."""
    params = TableGenerationParams(title="Loot", description="rare items")
    doc = to_storage_document("user-1", params, table)
    doc["table_data"]["rows"] = [["1", "Sunblade"]]

    with pytest.raises(ValidationError):
        from_storage_document({**doc, "id": "abc", "created_at": "2024-05-01T00:00:00+00:00"})


def test_from_storage_document_missing_field():
    """Missing fields propagate as errors."""
    with pytest.raises(KeyError):
        from_storage_document({"id": "abc"})
