"""Abstract base class for language model completion services."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class CompletionService(ABC):
    """Abstract base class for language model completion services."""

    @abstractmethod
    async def generate_completion(
        self, prompt: str, json_schema: Dict[str, Any], temperature: float
    ) -> str:
        """Generate a JSON completion constrained by ``json_schema``.

        Returns the raw text payload, or an empty string when the model
        produced none.
        """
        pass
