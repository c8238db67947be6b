"""OpenAI completion service implementation."""

import logging
import time
from typing import Any, Dict

from langsmith import traceable
from openai import AsyncOpenAI

from tablegen.core.config import Settings
from tablegen.services.llm.base import CompletionService

logger = logging.getLogger(__name__)

SCHEMA_NAME = "generated_table"


class OpenAICompletionService(CompletionService):
    """OpenAI completion service implementation."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        if settings.openai_api_key:
            # Failed calls surface to the user, who retries by hand
            self.client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                max_retries=0,
                timeout=settings.llm_timeout,
            )
        else:
            self.client = None  # type: ignore
            logger.warning(
                "OpenAI API key is not set. Table generation will be disabled."
            )

    @traceable(run_type="llm")
    async def generate_completion(
        self, prompt: str, json_schema: Dict[str, Any], temperature: float
    ) -> str:
        """Generate a JSON completion from the language model."""
        if self.client is None:
            raise RuntimeError("OpenAI client is not initialized")

        start_time = time.time()
        response = await self._make_api_call(prompt, json_schema, temperature)
        elapsed_time = time.time() - start_time
        logger.info(f"API call completed in {elapsed_time:.2f} seconds")

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    @traceable(name="llm_api_call", run_type="llm")
    async def _make_api_call(
        self, prompt: str, json_schema: Dict[str, Any], temperature: float
    ) -> Any:
        """Make the actual API call to OpenAI."""
        return await self.client.chat.completions.create(
            model=self.settings.llm_model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": SCHEMA_NAME,
                    "schema": json_schema,
                    "strict": True,
                },
            },
        )
