from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from typing import Dict, List, Sequence

from .codec import encode
from .errors import StoreIOError, WriteFailed
from .schema import Ritual

logger = logging.getLogger(__name__)

TABLE_NAME = "rituals"
DEFAULT_TIMEOUT = 5.0


class CatalogStore:
    """
    Durable, transactional storage of the Ritual set.

    Only the database path is held. Every operation opens its own connection
    and transaction, so one handle can be shared across request threads.
    """

    def __init__(self, path: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._path = path
        self._timeout = timeout

    @property
    def path(self) -> str:
        return self._path

    def _connect(self) -> sqlite3.Connection:
        try:
            # Autocommit mode; transactions are opened explicitly with BEGIN.
            return sqlite3.connect(self._path, timeout=self._timeout, isolation_level=None)
        except sqlite3.Error as e:
            raise StoreIOError(f"Cannot open catalog {self._path}: {e}") from e

    @staticmethod
    def _table_exists(conn: sqlite3.Connection) -> bool:
        cur = conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
            (TABLE_NAME,),
        )
        return cur.fetchone() is not None

    def exists(self) -> bool:
        """True iff the rituals table has been created (and so committed) at least once."""
        with closing(self._connect()) as conn:
            try:
                return self._table_exists(conn)
            except sqlite3.Error as e:
                raise StoreIOError(f"Cannot inspect catalog {self._path}: {e}") from e

    def put_all(self, records: Sequence[Ritual], replace: bool = False) -> None:
        """
        Insert every record in one write transaction, keyed by id.

        The table is created inside the same transaction, so either the table
        and all records become visible together or nothing does. For a
        duplicate id the last record wins. With `replace`, rows not in
        `records` are deleted in that same transaction.
        """
        # Encode up front; a failure here means nothing was written.
        rows: Dict[str, bytes] = {}
        for record in records:
            try:
                rows[record.id] = encode(record)
            except (TypeError, ValueError, AttributeError) as e:
                raise WriteFailed(f"Cannot encode record {getattr(record, 'id', '?')!r}: {e}") from e

        with closing(self._connect()) as conn:
            try:
                conn.execute("BEGIN IMMEDIATE")
                conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
                        id TEXT PRIMARY KEY,
                        payload BLOB NOT NULL
                    )
                    """
                )
                if replace:
                    conn.execute(f"DELETE FROM {TABLE_NAME}")
                conn.executemany(
                    f"""
                    INSERT INTO {TABLE_NAME} (id, payload) VALUES (?, ?)
                    ON CONFLICT(id) DO UPDATE SET payload = excluded.payload
                    """,
                    list(rows.items()),
                )
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise StoreIOError(f"Write to catalog {self._path} aborted: {e}") from e

        logger.debug("Stored %d rituals in %s", len(rows), self._path)

    def get_all(self) -> List[bytes]:
        """
        Return every stored payload, ordered by key.

        A missing table is the never-seeded state and yields an empty list.
        """
        with closing(self._connect()) as conn:
            try:
                conn.execute("BEGIN")
                if not self._table_exists(conn):
                    conn.execute("COMMIT")
                    return []
                cur = conn.execute(f"SELECT payload FROM {TABLE_NAME} ORDER BY id")
                payloads = [_as_bytes(row[0]) for row in cur.fetchall()]
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                raise StoreIOError(f"Read from catalog {self._path} failed: {e}") from e
        return payloads

    def count(self) -> int:
        with closing(self._connect()) as conn:
            try:
                if not self._table_exists(conn):
                    return 0
                return conn.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()[0]
            except sqlite3.Error as e:
                raise StoreIOError(f"Cannot count catalog {self._path}: {e}") from e

    def drop(self) -> None:
        """Remove the rituals table, returning the store to its never-seeded state."""
        with closing(self._connect()) as conn:
            try:
                conn.execute(f"DROP TABLE IF EXISTS {TABLE_NAME}")
            except sqlite3.Error as e:
                raise StoreIOError(f"Cannot drop catalog table in {self._path}: {e}") from e


def _as_bytes(value: object) -> bytes:
    # Rows written by older builds may hold TEXT rather than BLOB.
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)  # type: ignore[arg-type]
