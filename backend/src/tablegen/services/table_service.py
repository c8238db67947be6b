"""Service for a user's saved tables."""

import logging
from typing import List, Optional

from tablegen.core.session import SessionUser
from tablegen.models.table import GeneratedTable, StoredTable, TableGenerationParams
from tablegen.services.storage.base import TableStore
from tablegen.services.table_shape import from_storage_document, to_storage_document

logger = logging.getLogger(__name__)

DEFAULT_MAX_SAVED_TABLES = 5


class SaveLimitReachedError(Exception):
    """Raised when a user already holds the maximum number of saved tables."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"You can save at most {limit} tables. Delete one to save another."
        )
        self.limit = limit


class TableService:
    """Save, list, load and delete tables for a signed-in user.

    Store errors are not caught here; callers decide how to report them.
    """

    def __init__(
        self, store: TableStore, max_saved_tables: int = DEFAULT_MAX_SAVED_TABLES
    ) -> None:
        self.store = store
        self.max_saved_tables = max_saved_tables

    def save_table(
        self, user: SessionUser, params: TableGenerationParams, table: GeneratedTable
    ) -> StoredTable:
        """Save ``table`` for ``user``.

        Raises:
            SaveLimitReachedError: If the user is at the cap. Nothing is
                written and older tables are left in place.
        """
        if self.store.count_tables(user.uid) >= self.max_saved_tables:
            logger.info(f"User {user.uid} is at the saved table limit")
            raise SaveLimitReachedError(self.max_saved_tables)

        record = self.store.add_table(to_storage_document(user.uid, params, table))
        return from_storage_document(record)

    def list_recent_tables(self, user: SessionUser) -> List[StoredTable]:
        """Return the user's most recently saved tables, newest first."""
        docs = self.store.list_tables(user.uid, self.max_saved_tables)
        return [from_storage_document(doc) for doc in docs]

    def get_table(self, user: SessionUser, table_id: str) -> Optional[StoredTable]:
        doc = self.store.get_table(user.uid, table_id)
        if doc is None:
            return None
        return from_storage_document(doc)

    def delete_table(self, user: SessionUser, table_id: str) -> bool:
        return self.store.delete_table(user.uid, table_id)
