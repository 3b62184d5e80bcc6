"""
BookmarkShelf v1 - Bookmark Store

File-backed SQLite table of bookmark records keyed by url. Every ingest
run recreates the file from scratch, so its content reflects only the
latest run.
"""

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .chrome_parser import BookmarkRecord
from .errors import NotFoundError, QueryError, SchemaError, StoreIOError

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS bookmarks (
        name TEXT NOT NULL,
        url TEXT NOT NULL PRIMARY KEY
    )
"""

UPSERT_SQL = """
    INSERT INTO bookmarks (name, url)
    VALUES (:name, :url)
    ON CONFLICT (url)
    DO UPDATE SET name = excluded.name
"""

DEFAULT_BATCH_SIZE = 500

# Journal files SQLite may leave next to the store after a crash
SIDECAR_SUFFIXES = ("-journal", "-wal", "-shm")


@dataclass
class UpsertResult:
    """Result of an upsert operation"""
    total_processed: int = 0
    inserted: int = 0
    replaced: int = 0


class BookmarkStore:
    """
    SQLite-backed store of bookmark records.

    Holds one connection for its lifetime. Use ``initialize`` to start a run
    from an empty table, ``open`` to read an existing file, and always
    ``close`` (or use as a context manager).
    """

    def __init__(self, db_path: str | Path, conn: sqlite3.Connection):
        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = conn

    @classmethod
    def initialize(cls, db_path: str | Path) -> "BookmarkStore":
        """
        Remove any existing store at db_path and create a fresh table.

        Raises:
            StoreIOError: the old file cannot be removed or the new one opened
            SchemaError: the table cannot be created
        """
        path = Path(db_path)

        for stale in [path] + [path.with_name(path.name + s) for s in SIDECAR_SUFFIXES]:
            try:
                stale.unlink(missing_ok=True)
            except OSError as e:
                raise StoreIOError(f"Cannot remove existing store {stale}: {e}") from e

        try:
            conn = sqlite3.connect(str(path))
        except sqlite3.Error as e:
            raise StoreIOError(f"Cannot open store {path}: {e}") from e

        try:
            with conn:
                conn.execute(CREATE_TABLE_SQL)
        except sqlite3.Error as e:
            conn.close()
            raise SchemaError(f"Cannot create bookmarks table in {path}: {e}") from e

        logger.info(f"Initialized bookmark store at {path}")
        return cls(path, conn)

    @classmethod
    def open(cls, db_path: str | Path) -> "BookmarkStore":
        """
        Open an existing store read-only.

        Raises:
            NotFoundError: no store file at db_path
            StoreIOError: the file cannot be opened
        """
        path = Path(db_path)
        if not path.is_file():
            raise NotFoundError(f"Bookmark store not found: {path}")

        try:
            conn = sqlite3.connect(f"{path.resolve().as_uri()}?mode=ro", uri=True)
        except sqlite3.Error as e:
            raise StoreIOError(f"Cannot open store {path}: {e}") from e

        return cls(path, conn)

    def __enter__(self) -> "BookmarkStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._conn is None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise QueryError(f"Bookmark store {self.db_path} is closed")
        return self._conn

    def upsert(
        self,
        records: Iterable[BookmarkRecord],
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> UpsertResult:
        """
        Insert records in order, replacing the name of any existing url.

        The last occurrence of a url wins. Records are written in batches of
        batch_size, each batch in its own transaction. A failing record rolls
        back its batch and raises QueryError; earlier batches stay committed.

        Args:
            records: Records to write, in order
            batch_size: Number of records per transaction

        Returns:
            UpsertResult with counts of processed, inserted and replaced rows
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        records = list(records)
        result = UpsertResult()

        for i in range(0, len(records), batch_size):
            batch = records[i : i + batch_size]
            batch_result = self._process_batch(batch)

            result.total_processed += batch_result.total_processed
            result.inserted += batch_result.inserted
            result.replaced += batch_result.replaced

        logger.info(
            f"Upserted {result.total_processed} bookmarks "
            f"({result.inserted} new, {result.replaced} replaced)"
        )
        return result

    def _process_batch(self, records: list[BookmarkRecord]) -> UpsertResult:
        """Write one batch of records in a single transaction"""
        conn = self._connection()
        result = UpsertResult()

        try:
            with conn:
                before = self._count(conn)
                for record in records:
                    try:
                        conn.execute(UPSERT_SQL, {"name": record.name, "url": record.url})
                    except sqlite3.Error as e:
                        raise QueryError(f"Error upserting {record.url}: {e}") from e
                    result.total_processed += 1
                after = self._count(conn)
        except sqlite3.Error as e:
            raise QueryError(f"Error writing bookmark batch: {e}") from e

        result.inserted = after - before
        result.replaced = result.total_processed - result.inserted
        return result

    @staticmethod
    def _count(conn: sqlite3.Connection) -> int:
        row = conn.execute("SELECT COUNT(*) FROM bookmarks").fetchone()
        return row[0] if row else 0

    def count(self) -> int:
        """Number of distinct urls currently stored"""
        try:
            return self._count(self._connection())
        except sqlite3.Error as e:
            raise QueryError(f"Error counting bookmarks: {e}") from e

    def query_all(self) -> list[BookmarkRecord]:
        """Return every stored record, once per url"""
        conn = self._connection()
        try:
            rows = conn.execute("SELECT name, url FROM bookmarks ORDER BY rowid").fetchall()
        except sqlite3.Error as e:
            raise QueryError(f"Error querying bookmarks: {e}") from e

        return [BookmarkRecord(name=name, url=url) for name, url in rows]

    def close(self) -> None:
        """Release the connection. Further calls are no-ops."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug(f"Closed bookmark store {self.db_path}")


@contextmanager
def open_store(db_path: str | Path) -> Iterator[BookmarkStore]:
    """Context manager for a freshly initialized store"""
    store = BookmarkStore.initialize(db_path)
    try:
        yield store
    finally:
        store.close()
