"""Abstract base class for saved-table stores."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class TableStore(ABC):
    """Per-user store of table records.

    Records are the flat dictionaries built by
    ``tablegen.services.table_shape.to_storage_document``. The store assigns
    ``id`` and ``created_at``; every read and delete is scoped to one user.
    """

    @abstractmethod
    def add_table(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a record and return it with ``id`` and ``created_at`` set."""
        pass

    @abstractmethod
    def list_tables(self, user_id: str, limit: int) -> List[Dict[str, Any]]:
        """Return at most ``limit`` records for the user, newest first."""
        pass

    @abstractmethod
    def count_tables(self, user_id: str) -> int:
        """Return the number of records the user holds."""
        pass

    @abstractmethod
    def get_table(self, user_id: str, table_id: str) -> Optional[Dict[str, Any]]:
        """Return one record of the user, or None."""
        pass

    @abstractmethod
    def delete_table(self, user_id: str, table_id: str) -> bool:
        """Delete one record of the user. Returns False if it did not exist."""
        pass
