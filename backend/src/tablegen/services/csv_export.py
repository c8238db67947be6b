"""CSV export of generated tables."""

import csv
import io
import re

from tablegen.models.table import GeneratedTable

DELIMITER = ","
DEFAULT_FILENAME = "table"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w\s.-]", re.ASCII)
_LINE_BREAKS = re.compile(r"[\r\n]+")


def _flatten(cell: str) -> str:
    return _LINE_BREAKS.sub(" ", cell)


def table_to_csv(table: GeneratedTable) -> str:
    """Render ``table`` as CSV text, header first, one line per row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=DELIMITER, lineterminator="\n")
    writer.writerow([_flatten(cell) for cell in table.header])
    for row in table.rows:
        writer.writerow([_flatten(cell) for cell in row])
    return buffer.getvalue()


def csv_filename(title: str) -> str:
    """Download file name for a table titled ``title``."""
    name = _UNSAFE_FILENAME_CHARS.sub("", title)
    name = re.sub(r"\s+", " ", name).strip(". ")
    return f"{name or DEFAULT_FILENAME}.csv"
