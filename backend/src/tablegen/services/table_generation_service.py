"""Table generation service."""

import logging

from pydantic import ValidationError

from tablegen.models.table import (
    HEADER_LABEL,
    TABLE_RESPONSE_SCHEMA,
    GeneratedTable,
    TableGenerationParams,
)
from tablegen.services.llm.base import CompletionService

logger = logging.getLogger(__name__)

GENERATION_ERROR_MESSAGE = "Error generating table"


class TableGenerationError(Exception):
    """Raised when the model response cannot be turned into a table."""

    def __init__(self, message: str = GENERATION_ERROR_MESSAGE) -> None:
        super().__init__(message)


def build_prompt(params: TableGenerationParams) -> str:
    """Build the generation prompt for ``params``."""
    return (
        f'Generate a table with the name "{params.title}" and the description '
        f'"{params.description}".\n'
        f"The table should have {params.row_count} rows, not counting the header row.\n"
        "The first column of the table should be numbered starting with 1.\n"
        "The second column should be generated names.\n"
        f"The third column should be descriptions of {params.item_length.value.lower()} length.\n"
        "Make the descriptions varied and do not start them all with the same word "
        '("A", "The", "This", etc.).\n'
        "Only include additional columns if requested in the description."
    )


def normalize_header(table: GeneratedTable) -> GeneratedTable:
    """Return ``table`` with its first header cell replaced by the fixed label."""
    header = list(table.header)
    if header:
        header[0] = HEADER_LABEL
    else:
        header = [HEADER_LABEL]
    return GeneratedTable(header=header, rows=table.rows)


class TableGenerationService:
    """Turn generation parameters into a table using a completion service."""

    def __init__(self, llm_service: CompletionService) -> None:
        self.llm_service = llm_service

    async def generate_table(self, params: TableGenerationParams) -> GeneratedTable:
        """Generate a table for ``params``.

        Raises:
            TableGenerationError: If the service fails, returns no text, or
                returns text that does not parse into a table.
        """
        prompt = build_prompt(params)
        logger.info(
            f"Generating table '{params.title}' with {params.row_count} rows "
            f"at temperature {params.temperature}"
        )

        try:
            text = await self.llm_service.generate_completion(
                prompt, TABLE_RESPONSE_SCHEMA, params.temperature
            )
        except Exception as e:
            logger.error(f"Completion request failed: {e}")
            raise TableGenerationError() from e

        if not text or not text.strip():
            logger.error("Completion returned an empty response")
            raise TableGenerationError()

        try:
            table = GeneratedTable.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Completion did not match the table schema: {e}")
            raise TableGenerationError() from e

        if len(table.rows) != params.row_count:
            logger.warning(
                f"Requested {params.row_count} rows, model returned {len(table.rows)}"
            )

        return normalize_header(table)
