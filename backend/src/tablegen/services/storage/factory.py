"""Factory for saved-table stores."""

import logging
from typing import Optional

from tablegen.core.config import Settings
from tablegen.database.supabase_client import create_service_client
from tablegen.services.storage.base import TableStore
from tablegen.services.storage.sqlite_store import SqliteTableStore
from tablegen.services.storage.supabase_store import SupabaseTableStore

logger = logging.getLogger(__name__)


class TableStoreFactory:
    """Create the table store for the configured provider."""

    @staticmethod
    def create_store(settings: Settings) -> Optional[TableStore]:
        provider = settings.table_store_provider
        if provider == "sqlite":
            return SqliteTableStore(settings.table_states_db_uri)
        if provider == "supabase":
            return SupabaseTableStore(
                create_service_client(settings), settings.supabase_tables_table
            )

        logger.error(f"Unsupported table store provider: {provider}")
        return None
