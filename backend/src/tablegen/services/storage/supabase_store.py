"""Table store backed by a Supabase (PostgREST) table."""

import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from tablegen.services.storage.base import TableStore

logger = logging.getLogger(__name__)

# Expected Supabase table structure:
# - id: uuid (primary key, default gen_random_uuid())
# - user_id: uuid (not null)
# - title: text, description: text
# - row_count: int, item_length: text, temperature: float8
# - table_data: jsonb ({"header": [...], "rows": [{"cells": [...]}, ...]})
# - created_at: timestamptz (default now())


class SupabaseTableStore(TableStore):
    """Store saved tables in a Supabase table partitioned by ``user_id``."""

    def __init__(self, supabase: Client, table_name: str = "user_tables") -> None:
        self.supabase = supabase
        self.table_name = table_name

    def add_table(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        result = self.supabase.table(self.table_name).insert(doc).execute()
        if not result.data:
            raise RuntimeError("Insert returned no record")

        record = result.data[0]
        logger.info(f"Inserted table {record['id']} for user {record['user_id']}")
        return record

    def list_tables(self, user_id: str, limit: int) -> List[Dict[str, Any]]:
        result = self.supabase.table(self.table_name)\
            .select("*")\
            .eq("user_id", user_id)\
            .order("created_at", desc=True)\
            .limit(limit)\
            .execute()
        return result.data or []

    def count_tables(self, user_id: str) -> int:
        result = self.supabase.table(self.table_name)\
            .select("id", count="exact")\
            .eq("user_id", user_id)\
            .execute()
        return result.count or 0

    def get_table(self, user_id: str, table_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table(self.table_name)\
            .select("*")\
            .eq("user_id", user_id)\
            .eq("id", table_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return result.data[0]

    def delete_table(self, user_id: str, table_id: str) -> bool:
        result = self.supabase.table(self.table_name)\
            .delete()\
            .eq("user_id", user_id)\
            .eq("id", table_id)\
            .execute()
        if not result.data:
            logger.warning(f"Table {table_id} not found for user {user_id}")
            return False

        logger.info(f"Deleted table {table_id} for user {user_id}")
        return True
