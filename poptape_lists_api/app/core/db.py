"""
SQLite document store and simple migration system.

Every list type is stored in its own table holding one row per user.
Rows are treated as documents: the ``item_ids`` column is a JSON array
and the :class:`Collection` wrapper exposes the handful of document
operations the services need (find, insert, update and delete by id,
count by containment).

Mutations run inside ``BEGIN IMMEDIATE`` transactions so that the read
and the write of a read-modify-write happen under the database write
lock.  Any ``sqlite3.Error`` escaping a collection context is re-raised
as :class:`StorageError`.
"""

import json
import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .config import settings
from .errors import StorageError
from .validation import LIST_TYPES

logger = logging.getLogger(__name__)

# Seconds to wait for another writer to release the database lock.
LOCK_TIMEOUT = 5.0


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative paths are resolved against
    the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection with name-addressable rows."""
    conn = sqlite3.connect(get_database_path(), timeout=LOCK_TIMEOUT)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


class Collection:
    """Document-style access to the table backing one list type.

    Documents are plain dicts with the keys ``id``, ``item_ids``,
    ``created_at`` and ``updated_at``.
    """

    def __init__(self, conn: sqlite3.Connection, name: str):
        if name not in LIST_TYPES:
            # Table names are interpolated into SQL, so only the fixed
            # vocabulary may get this far.
            raise ValueError(f"Unknown collection: {name!r}")
        self.conn = conn
        self.name = name

    def find_one(self, doc_id: str) -> Optional[Dict[str, Any]]:
        row = self.conn.execute(
            f'SELECT id, item_ids, created_at, updated_at FROM "{self.name}" WHERE id = ?',
            (doc_id,),
        ).fetchone()
        if row is None:
            return None
        return {
            "id": row["id"],
            "item_ids": json.loads(row["item_ids"]),
            "created_at": row["created_at"],
            "updated_at": row["updated_at"],
        }

    def insert_one(self, document: Dict[str, Any]) -> None:
        self.conn.execute(
            f'INSERT INTO "{self.name}" (id, item_ids, created_at, updated_at) VALUES (?, ?, ?, ?)',
            (
                document["id"],
                json.dumps(document["item_ids"]),
                document["created_at"],
                document["updated_at"],
            ),
        )

    def update_one(self, doc_id: str, item_ids: List[str], updated_at: str) -> int:
        cursor = self.conn.execute(
            f'UPDATE "{self.name}" SET item_ids = ?, updated_at = ? WHERE id = ?',
            (json.dumps(item_ids), updated_at, doc_id),
        )
        return cursor.rowcount

    def delete_one(self, doc_id: str) -> int:
        cursor = self.conn.execute(f'DELETE FROM "{self.name}" WHERE id = ?', (doc_id,))
        return cursor.rowcount

    def count_containing(self, item_id: str) -> int:
        """Count documents whose ``item_ids`` array contains ``item_id``."""
        row = self.conn.execute(
            f'SELECT COUNT(*) AS n FROM "{self.name}" AS doc '
            "WHERE EXISTS (SELECT 1 FROM json_each(doc.item_ids) WHERE json_each.value = ?)",
            (item_id,),
        ).fetchone()
        return int(row["n"])


@contextmanager
def open_collection(name: str, write: bool = False) -> Iterator[Collection]:
    """Yield a :class:`Collection` bound to a fresh connection.

    With ``write=True`` the block runs in an immediate transaction that
    is committed on success and rolled back on any exception.
    """
    conn = None
    try:
        conn = get_connection()
        if write:
            conn.execute("BEGIN IMMEDIATE")
        try:
            yield Collection(conn, name)
            if write:
                conn.commit()
        except BaseException:
            if write and conn.in_transaction:
                conn.rollback()
            raise
    except sqlite3.Error as exc:
        logger.error("Storage failure on collection %s: %s", name, exc)
        raise StorageError(f"Storage failure on {name}") from exc
    finally:
        if conn is not None:
            conn.close()


def _list_table_sql(name: str) -> str:
    return f"""
        CREATE TABLE IF NOT EXISTS "{name}" (
            id TEXT PRIMARY KEY,
            item_ids TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );
    """


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies newer migrations in order.  New
    migrations must be appended with an incremented version number.
    """
    migrations: list[tuple[int, str]] = [
        # Migration 1: one document table per list type
        (1, "".join(_list_table_sql(name) for name in LIST_TYPES)),
    ]

    try:
        with get_cursor() as cursor:
            cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in migrations:
                if version > current_version:
                    logger.info("Applying database migration %s", version)
                    cursor.executescript(sql)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    current_version = version
    except sqlite3.Error as exc:
        logger.error("Database initialisation failed: %s", exc)
        raise StorageError("Database initialisation failed") from exc
