"""
Persistent store for portfolio items.

``PortfolioStore`` owns the SQLite file holding the ``portfolio``
table.  A single instance is created when the application starts and
handed to the request handlers; every operation opens its own
connection, so the instance can be used from any worker thread.

Errors from ``sqlite3`` are wrapped in the classes from
``core.errors`` so that callers never have to catch driver exceptions.
All queries use parameterized statements.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Type, Union

from portfolio_server.app.core.db import ensure_price_column, get_connection, init_db
from portfolio_server.app.core.errors import (
    InitializationError,
    InsertError,
    QueryError,
    SeedImportError,
    StoreError,
)
from portfolio_server.app.schemas.portfolio import PortfolioItemBase, PortfolioItemRead
from portfolio_server.app.services.seed_loader import load_seed_document, resolve_price

logger = logging.getLogger(__name__)

INSERT_SQL = "INSERT INTO portfolio (title, category, prix, img) VALUES (?, ?, ?, ?)"
SELECT_SQL = "SELECT id, title, category, prix, img FROM portfolio ORDER BY id ASC"
COUNT_SQL = "SELECT COUNT(*) AS n FROM portfolio"


class PortfolioStore:
    """SQLite-backed collection of portfolio items."""

    def __init__(self, db_path: Union[str, Path]) -> None:
        """Open (creating if needed) the database at ``db_path``.

        Raises ``InitializationError`` if the file cannot be opened or
        the table cannot be created.
        """
        self.db_path = Path(db_path)
        try:
            init_db(self.db_path)
        except (OSError, sqlite3.Error) as exc:
            raise InitializationError(f"cannot initialise database {self.db_path}: {exc}") from exc
        logger.debug("Portfolio database ready at %s", self.db_path)

    @contextmanager
    def _connect(self, error_cls: Type[StoreError], action: str) -> Iterator[sqlite3.Connection]:
        """Yield a connection, translating ``sqlite3`` errors into ``error_cls``.

        Uncommitted work is rolled back when the block raises.
        """
        try:
            conn = get_connection(self.db_path)
        except sqlite3.Error as exc:
            raise error_cls(f"{action} failed: {exc}") from exc
        try:
            yield conn
        except sqlite3.Error as exc:
            conn.rollback()
            raise error_cls(f"{action} failed: {exc}") from exc
        finally:
            conn.close()

    def ensure_schema(self) -> None:
        """Backfill the ``prix`` column on databases created without it.

        Safe to call any number of times.  Raises ``QueryError`` on
        failure.
        """
        with self._connect(QueryError, "schema check") as conn:
            ensure_price_column(conn)
            conn.commit()

    def count(self) -> int:
        """Return the number of stored items."""
        with self._connect(QueryError, "count") as conn:
            return conn.execute(COUNT_SQL).fetchone()["n"]

    def seed_from_source(self, source: Union[str, Path]) -> int:
        """Import the seed document at ``source`` into an empty table.

        Does nothing and returns 0 when the table already holds at least
        one item.  Otherwise every record is inserted in a single
        transaction and the number of imported items is returned; if
        any insert fails nothing is committed and ``SeedImportError`` is
        raised.  ``SourceReadError``/``SourceParseError`` are raised
        when the document cannot be read or parsed.

        The emptiness check and the import are not locked against a
        concurrent seed; call this once at startup, before serving.
        """
        with self._connect(SeedImportError, "seed import") as conn:
            existing = conn.execute(COUNT_SQL).fetchone()["n"]
            if existing > 0:
                logger.debug("Portfolio already holds %d items, skipping seed", existing)
                return 0

            records = load_seed_document(source)
            rows = [
                (
                    record.get("title") or "",
                    record.get("category") or "",
                    resolve_price(record),
                    record.get("img") or "",
                )
                for record in records
            ]
            ensure_price_column(conn)
            conn.executemany(INSERT_SQL, rows)
            conn.commit()

        logger.info("Imported %d portfolio items from %s", len(rows), Path(source).name)
        return len(rows)

    def list_all(self) -> List[PortfolioItemRead]:
        """Return every item ordered by ``id`` ascending.

        An empty table yields an empty list.  Raises ``QueryError`` if
        the database cannot be read.
        """
        with self._connect(QueryError, "portfolio query") as conn:
            ensure_price_column(conn)
            conn.commit()
            rows = conn.execute(SELECT_SQL).fetchall()
        return [self._row_to_item(row) for row in rows]

    def insert(self, item: PortfolioItemBase) -> PortfolioItemRead:
        """Insert ``item`` and return it with its store-assigned ``id``.

        Any ``id`` already present on ``item`` is ignored.  Raises
        ``InsertError`` if the row cannot be written.
        """
        with self._connect(InsertError, "insert") as conn:
            ensure_price_column(conn)
            cursor = conn.execute(INSERT_SQL, (item.title, item.category, item.price, item.image_ref))
            conn.commit()
            item_id = cursor.lastrowid
        logger.info("Created portfolio item %s", item_id)
        return PortfolioItemRead(
            id=item_id,
            title=item.title,
            category=item.category,
            price=item.price,
            image_ref=item.image_ref,
        )

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> PortfolioItemRead:
        """Convert a database row to a ``PortfolioItemRead``.

        NULL cells (rows written before a column existed) read as empty
        strings and a zero price.
        """
        return PortfolioItemRead(
            id=row["id"],
            title=row["title"] or "",
            category=row["category"] or "",
            price=row["prix"] if row["prix"] is not None else 0.0,
            image_ref=row["img"] or "",
        )
