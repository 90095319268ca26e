"""SQLite connection handling."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from planner.config import get_config

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


def _resolve_path(db_path: str | None) -> str:
    return db_path or get_config().database_path


@contextmanager
def get_db(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """Open a connection; commit on success, roll back on error.

    Usage:
        with get_db() as conn:
            conn.execute(...)
    """
    conn = sqlite3.connect(_resolve_path(db_path))
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: str | None = None) -> None:
    """Create tables if they do not exist."""
    path = _resolve_path(db_path)
    with get_db(path) as conn:
        conn.executescript(SCHEMA)
    logger.debug("Database ready at %s", path)
