"""Table store backed by a local SQLite database."""

import json
import logging
import os
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from tablegen.services.storage.base import TableStore

logger = logging.getLogger(__name__)

COLUMNS = (
    "id, user_id, title, description, row_count, item_length, "
    "temperature, table_data, created_at"
)


class SqliteTableStore(TableStore):
    """Store saved tables in SQLite, one row per record, table data as JSON."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        dir_path = os.path.dirname(db_path)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)
        self.init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create the user_tables table if it doesn't exist."""
        conn = self._connect()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS user_tables (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL,
                    row_count INTEGER NOT NULL,
                    item_length TEXT NOT NULL,
                    temperature REAL NOT NULL,
                    table_data TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_user_tables_user_created "
                "ON user_tables (user_id, created_at)"
            )
            conn.commit()
        finally:
            conn.close()

        logger.info(f"Initialized SQLite table store at {self.db_path}")

    @staticmethod
    def _row_to_doc(row: sqlite3.Row) -> Dict[str, Any]:
        doc = dict(row)
        doc["table_data"] = json.loads(doc["table_data"])
        doc["created_at"] = datetime.fromisoformat(doc["created_at"])
        return doc

    def add_table(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(doc)
        record["id"] = uuid.uuid4().hex
        record["created_at"] = datetime.now(timezone.utc)

        conn = self._connect()
        try:
            conn.execute(
                f"INSERT INTO user_tables ({COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record["id"],
                    record["user_id"],
                    record["title"],
                    record["description"],
                    record["row_count"],
                    record["item_length"],
                    record["temperature"],
                    json.dumps(record["table_data"]),
                    record["created_at"].isoformat(),
                ),
            )
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Error saving table for user {record['user_id']}: {e}")
            raise
        finally:
            conn.close()

        logger.info(f"Inserted table {record['id']} for user {record['user_id']}")
        return record

    def list_tables(self, user_id: str, limit: int) -> List[Dict[str, Any]]:
        conn = self._connect()
        try:
            rows = conn.execute(
                f"SELECT {COLUMNS} FROM user_tables WHERE user_id = ? "
                "ORDER BY created_at DESC, rowid DESC LIMIT ?",
                (user_id, limit),
            ).fetchall()
        finally:
            conn.close()

        return [self._row_to_doc(row) for row in rows]

    def count_tables(self, user_id: str) -> int:
        conn = self._connect()
        try:
            (count,) = conn.execute(
                "SELECT COUNT(*) FROM user_tables WHERE user_id = ?", (user_id,)
            ).fetchone()
        finally:
            conn.close()
        return count

    def get_table(self, user_id: str, table_id: str) -> Optional[Dict[str, Any]]:
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT {COLUMNS} FROM user_tables WHERE user_id = ? AND id = ?",
                (user_id, table_id),
            ).fetchone()
        finally:
            conn.close()

        if row is None:
            return None
        return self._row_to_doc(row)

    def delete_table(self, user_id: str, table_id: str) -> bool:
        conn = self._connect()
        try:
            cursor = conn.execute(
                "DELETE FROM user_tables WHERE user_id = ? AND id = ?",
                (user_id, table_id),
            )
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Error deleting table {table_id}: {e}")
            raise
        finally:
            conn.close()

        if cursor.rowcount == 0:
            logger.warning(f"Table {table_id} not found for user {user_id}")
            return False

        logger.info(f"Deleted table {table_id} for user {user_id}")
        return True
