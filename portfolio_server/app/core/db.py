"""
SQLite database integration.

This module provides the connection factory used by the portfolio
store (``get_connection``), schema creation (``init_db``) and the
opportunistic backfill of the ``prix`` column (``ensure_price_column``)
for databases created before prices were stored.

The schema is deliberately tiny, so instead of a migration table the
only historical change (the missing ``prix`` column) is repaired in
place with an idempotent ``ALTER TABLE``.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)

PORTFOLIO_TABLE = "portfolio"

SCHEMA = """
CREATE TABLE IF NOT EXISTS portfolio (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT,
    category TEXT,
    prix REAL,
    img TEXT
);
"""


def get_connection(db_path: Union[str, Path]) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.  A
    fresh connection is opened for every operation so that a single
    store can be shared by all worker threads.
    """
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: Union[str, Path]) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit.

    The transaction is committed when the block exits normally and
    rolled back when it raises.
    """
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: Union[str, Path]) -> None:
    """Create the database file and the ``portfolio`` table if absent.

    Existing data is never touched.  Raises ``OSError`` or
    ``sqlite3.Error`` on failure; callers wrap these.
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    with get_cursor(db_path) as cursor:
        cursor.executescript(SCHEMA)


def ensure_price_column(conn: sqlite3.Connection) -> None:
    """Add the ``prix`` column to ``portfolio`` when it is missing.

    Older databases were created without a price.  The check is
    idempotent: an existing column is left alone and the "duplicate
    column" error raised when another connection adds it first is
    treated as success.  Any other ``sqlite3.Error`` propagates.
    """
    columns = {row["name"] for row in conn.execute(f"PRAGMA table_info({PORTFOLIO_TABLE})")}
    if "prix" in columns:
        return
    try:
        conn.execute(f"ALTER TABLE {PORTFOLIO_TABLE} ADD COLUMN prix REAL")
    except sqlite3.OperationalError as exc:
        if "duplicate column" not in str(exc).lower():
            raise
        return
    logger.info("Added missing prix column to %s table", PORTFOLIO_TABLE)
