import logging
import sqlite3
from typing import Any, List, Optional, Sequence

from config import settings

logger = logging.getLogger(__name__)

# Default database file. LIBRARY_DB_FILE (via config) overrides it; tests pass
# their own file explicitly.
DATABASE_FILE = settings.database_file


class DataAccessError(Exception):
    """Raised when a query or connection against the store fails."""


class NotFoundError(LookupError):
    """Raised when a single-row query matches nothing."""


def get_db_connection(db_file: Optional[str] = None) -> sqlite3.Connection:
    """Opens a connection to the SQLite database with dict-like rows."""
    try:
        conn = sqlite3.connect(db_file or DATABASE_FILE)
    except sqlite3.Error as e:
        raise DataAccessError(f"Could not open database: {e}") from e
    conn.row_factory = sqlite3.Row
    return conn


def fetch_all(sql: str, params: Sequence[Any] = (), db_file: Optional[str] = None) -> List[dict]:
    """Runs a SELECT with bound parameters and returns every row as a dict."""
    conn = get_db_connection(db_file)
    try:
        cursor = conn.execute(sql, tuple(params))
        return [dict(row) for row in cursor.fetchall()]
    except sqlite3.Error as e:
        raise DataAccessError(str(e)) from e
    finally:
        conn.close()


def fetch_one(sql: str, params: Sequence[Any] = (), db_file: Optional[str] = None) -> dict:
    """Runs a SELECT expected to match exactly one row.

    Raises NotFoundError when no row matches.
    """
    conn = get_db_connection(db_file)
    try:
        row = conn.execute(sql, tuple(params)).fetchone()
    except sqlite3.Error as e:
        raise DataAccessError(str(e)) from e
    finally:
        conn.close()
    if row is None:
        raise NotFoundError("No row matched the query.")
    return dict(row)


def execute(sql: str, params: Sequence[Any] = (), db_file: Optional[str] = None) -> int:
    """Runs a single write statement and commits it. Returns the last row id."""
    conn = get_db_connection(db_file)
    try:
        cursor = conn.execute(sql, tuple(params))
        conn.commit()
        return cursor.lastrowid
    except sqlite3.Error as e:
        conn.rollback()
        raise DataAccessError(str(e)) from e
    finally:
        conn.close()


def create_tables(db_file: Optional[str] = None) -> None:
    """Creates the books table if it does not exist."""
    conn = get_db_connection(db_file)
    try:
        cursor = conn.cursor()
        # AUTOINCREMENT keeps deleted ids from being handed out again
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS books (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                author TEXT NOT NULL,
                publisher TEXT NOT NULL,
                publish_date TEXT NOT NULL,
                thumbnail_name TEXT,
                thumbnail_url TEXT,
                detail TEXT,
                isbn TEXT NOT NULL,
                reg_date TIMESTAMP,
                upd_date TIMESTAMP
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_books_title ON books(title)")
        conn.commit()
    except sqlite3.Error as e:
        raise DataAccessError(str(e)) from e
    finally:
        conn.close()


def initialize_database(db_file: Optional[str] = None) -> None:
    """Initializes the database, creating tables if needed."""
    create_tables(db_file)
    logger.debug("Database ready at %s", db_file or DATABASE_FILE)


def ping(db_file: Optional[str] = None) -> bool:
    """Quick connectivity check used by the health endpoint."""
    try:
        fetch_one("SELECT 1 AS ok", db_file=db_file)
        return True
    except (DataAccessError, NotFoundError):
        return False
