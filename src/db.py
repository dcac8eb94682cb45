"""SQLite helpers for the local key-value store."""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


def wal_connect(db_path: str | Path) -> sqlite3.Connection:
    """Open SQLite connection with WAL journal mode, creating parent dirs."""
    path = Path(db_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


@contextmanager
def wal_session(db_path: str | Path) -> Iterator[sqlite3.Connection]:
    """Connection that commits on success and always closes."""
    conn = wal_connect(db_path)
    try:
        with conn:
            yield conn
    finally:
        conn.close()
