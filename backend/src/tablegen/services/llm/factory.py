"""Factory for language model completion services."""

import logging
from typing import Optional

from tablegen.core.config import Settings
from tablegen.services.llm.base import CompletionService
from tablegen.services.llm.openai_llm_service import OpenAICompletionService

logger = logging.getLogger(__name__)


class CompletionServiceFactory:
    """Create the completion service for the configured provider."""

    @staticmethod
    def create_service(settings: Settings) -> Optional[CompletionService]:
        if settings.llm_provider == "openai":
            return OpenAICompletionService(settings)

        logger.error(f"Unsupported LLM provider: {settings.llm_provider}")
        return None
