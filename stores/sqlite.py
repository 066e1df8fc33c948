"""
SQLite-backed credential store.

Read-mostly lookup of store credentials keyed by store id.

Design:
- One table: stores
- Columns: id, whatsapp_access_token, whatsapp_phone_number_id,
  whatsapp_webhook_secret, created_at, updated_at
- save() is an upsert used by operational tooling (scripts/register_store.py)
"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, List, Optional

from stores.base import CredentialStore
from stores.types import CredentialStoreError, StoreCredentials

logger = logging.getLogger(__name__)


class SQLiteCredentialStore(CredentialStore):
    """
    SQLite credential store.

    A connection is opened per operation. For ':memory:' databases a single
    connection is kept for the lifetime of the store, since the schema would
    otherwise vanish between operations.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize SQLite credential store.

        Args:
            db_path: Path to SQLite database file.
                    If None, uses ':memory:' (in-memory, useful for testing).
        """
        self.db_path = db_path or ":memory:"
        self._memory_conn: Optional[sqlite3.Connection] = None
        if self.db_path == ":memory:":
            self._memory_conn = sqlite3.connect(":memory:", check_same_thread=False)
        self._initialize_db()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        if self._memory_conn is not None:
            yield self._memory_conn
            return

        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
        finally:
            conn.close()

    def _initialize_db(self) -> None:
        """
        Create the stores table if it does not exist.

        Raises:
            CredentialStoreError: Database cannot be opened or written
        """
        try:
            with self._connection() as conn:
                cursor = conn.cursor()

                if self.db_path != ":memory:":
                    cursor.execute("PRAGMA journal_mode=WAL")

                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS stores (
                        id TEXT PRIMARY KEY,
                        whatsapp_access_token TEXT,
                        whatsapp_phone_number_id TEXT,
                        whatsapp_webhook_secret TEXT,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                """)
                conn.commit()

            logger.debug(f"SQLite credential store initialized: {self.db_path}")
        except sqlite3.Error as e:
            logger.error(f"Failed to initialize credential store: {str(e)}")
            raise CredentialStoreError(f"Cannot initialize {self.db_path}: {e}") from e

    def get(self, store_id: str) -> Optional[StoreCredentials]:
        try:
            with self._connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    SELECT id, whatsapp_access_token, whatsapp_phone_number_id,
                           whatsapp_webhook_secret
                    FROM stores
                    WHERE id = ?
                    """,
                    (store_id,),
                )
                row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during store lookup: {store_id}, {str(e)}")
            raise CredentialStoreError(f"Store lookup failed: {e}") from e

        if row is None:
            logger.debug(f"Store not found: {store_id}")
            return None

        return StoreCredentials(
            store_id=row[0],
            access_token=row[1],
            phone_number_id=row[2],
            webhook_secret=row[3],
        )

    def save(self, credentials: StoreCredentials) -> None:
        """Insert or update a store's credentials."""
        try:
            with self._connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT INTO stores (
                        id, whatsapp_access_token, whatsapp_phone_number_id,
                        whatsapp_webhook_secret
                    )
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(id)
                    DO UPDATE SET
                        whatsapp_access_token = excluded.whatsapp_access_token,
                        whatsapp_phone_number_id = excluded.whatsapp_phone_number_id,
                        whatsapp_webhook_secret = excluded.whatsapp_webhook_secret,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (
                        credentials.store_id,
                        credentials.access_token,
                        credentials.phone_number_id,
                        credentials.webhook_secret,
                    ),
                )
                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during store save: {credentials.store_id}, {str(e)}")
            raise CredentialStoreError(f"Store save failed: {e}") from e

        logger.info(f"Store credentials saved: store_id={credentials.store_id}")

    def list_stores(self) -> List[StoreCredentials]:
        """Return every registered store, ordered by id."""
        try:
            with self._connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    SELECT id, whatsapp_access_token, whatsapp_phone_number_id,
                           whatsapp_webhook_secret
                    FROM stores
                    ORDER BY id
                    """
                )
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise CredentialStoreError(f"Store listing failed: {e}") from e

        return [
            StoreCredentials(
                store_id=row[0],
                access_token=row[1],
                phone_number_id=row[2],
                webhook_secret=row[3],
            )
            for row in rows
        ]
