"""
SQLite database access.

``Database`` wraps a database file and opens a fresh connection for
every statement, so it can be shared between concurrently handled
requests.  Driver errors are converted into ``PersistenceError`` with
the text of the failing statement attached.

The application keeps its ``Database`` on ``app.state``; routes
obtain it through the ``get_database`` dependency, which tests can
override or bypass by passing their own instance to ``create_app``.
"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

from fastapi import Request

from .errors import PersistenceError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS user (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    name TEXT NOT NULL
)
"""

# Raised by the driver itself, or while binding parameters it cannot store
# (integers beyond 64 bits, strings that do not encode to UTF-8).
DRIVER_ERRORS = (sqlite3.Error, OverflowError, UnicodeEncodeError)


class Database:
    """Handle on a SQLite database file."""

    def __init__(self, path: str) -> None:
        self.path = path

    def connect(self) -> sqlite3.Connection:
        """Create and return a new connection with rows keyed by column name."""
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def cursor(self, sql: str) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor for running ``sql``; commit on success and close the connection.

        ``sql`` is only used to label a ``PersistenceError`` raised from
        inside the block.
        """
        try:
            conn = self.connect()
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc), sql) from exc
        try:
            yield conn.cursor()
            conn.commit()
        except DRIVER_ERRORS as exc:
            conn.rollback()
            raise PersistenceError(str(exc), sql) from exc
        finally:
            conn.close()

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        logger.debug("SQL: %s %r", sql, params)
        with self.cursor(sql) as cur:
            return [dict(row) for row in cur.execute(sql, params).fetchall()]

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        logger.debug("SQL: %s %r", sql, params)
        with self.cursor(sql) as cur:
            row = cur.execute(sql, params).fetchone()
            return dict(row) if row is not None else None

    def execute(self, sql: str, params: Sequence[Any] = ()) -> Optional[int]:
        """Run a write statement and return the id of the last inserted row."""
        logger.debug("SQL: %s %r", sql, params)
        with self.cursor(sql) as cur:
            cur.execute(sql, params)
            return cur.lastrowid

    def init_schema(self) -> None:
        """Create the ``user`` table if it does not exist yet."""
        with self.cursor(SCHEMA) as cur:
            cur.execute(SCHEMA)
        logger.info("Database ready at %s", self.path)


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's ``Database``."""
    return request.app.state.database
