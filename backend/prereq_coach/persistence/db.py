"""SQLite connection + schema initialisation."""
from __future__ import annotations
import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional

from prereq_coach.core.config import DATABASE_PATH
from prereq_coach.domain.common.errors import DataAccessError

logger = logging.getLogger(__name__)

_MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "migrations")


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path or DATABASE_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    try:
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
    except sqlite3.Error:
        conn.close()
        raise
    return conn


@contextmanager
def connection(operation: str, db_path: Optional[str] = None) -> Iterator[sqlite3.Connection]:
    """
    Open a connection for one repository call, commit on success and always
    close. Any sqlite3 error surfaces as DataAccessError naming the operation.
    """
    try:
        conn = get_connection(db_path)
    except sqlite3.Error as e:
        logger.error("Database unavailable during %s: %s", operation, e)
        raise DataAccessError(operation, e) from e
    try:
        yield conn
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        logger.error("Database error during %s: %s", operation, e)
        raise DataAccessError(operation, e) from e
    finally:
        conn.close()


def init_db(db_path: Optional[str] = None) -> None:
    """Run all migration SQL files against the database."""
    path = db_path or DATABASE_PATH
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    migrations = sorted(f for f in os.listdir(_MIGRATIONS_DIR) if f.endswith(".sql"))
    with connection("init_db", path) as conn:
        for name in migrations:
            with open(os.path.join(_MIGRATIONS_DIR, name), "r", encoding="utf-8") as f:
                conn.executescript(f.read())
    logger.info("Database schema ready at %s (%d migration(s))", path, len(migrations))


def ping(db_path: Optional[str] = None) -> bool:
    """Cheap liveness check used by the health endpoint."""
    with connection("ping", db_path) as conn:
        return conn.execute("SELECT 1").fetchone()[0] == 1
