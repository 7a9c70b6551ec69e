"""
Database Utilities

SQLite connection helpers for the role/permission store.

Usage:
    from backoffice_auth.db import get_sqlite_connection, get_readonly_connection

    conn = get_sqlite_connection("path/to/backoffice.db")      # schema setup, seeding
    conn = get_readonly_connection("path/to/backoffice.db")    # permission reads
"""

import sqlite3
from pathlib import Path
from typing import Union
import logging

logger = logging.getLogger(__name__)


def get_sqlite_connection(
    database: Union[str, Path],
    check_same_thread: bool = True,
    timeout: float = 30.0
) -> sqlite3.Connection:
    """
    Create a SQLite connection with WAL mode and Row factory

    Args:
        database: Path to SQLite database file (or ":memory:")
        check_same_thread: Whether to check same thread
        timeout: Connection timeout in seconds

    Returns:
        Configured SQLite connection
    """
    conn = sqlite3.connect(
        str(database),
        check_same_thread=check_same_thread,
        timeout=timeout
    )

    try:
        # Concurrent reads while the application writes role data
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        conn.execute("PRAGMA synchronous=NORMAL")
        conn.execute("PRAGMA temp_store=MEMORY")
    except sqlite3.Error:
        conn.close()
        raise

    conn.row_factory = sqlite3.Row

    logger.debug(f"SQLite connection created for {database}")

    return conn


def get_readonly_connection(
    database: Union[str, Path],
    check_same_thread: bool = True,
    timeout: float = 30.0
) -> sqlite3.Connection:
    """
    Open an existing SQLite database read-only with Row factory

    Never creates the file and never changes database settings
    (journal mode etc.), so it also works on read-only mounts.

    Raises:
        sqlite3.OperationalError: if the file does not exist or cannot be opened
    """
    uri = Path(database).resolve().as_uri() + "?mode=ro"
    conn = sqlite3.connect(
        uri,
        uri=True,
        check_same_thread=check_same_thread,
        timeout=timeout
    )
    conn.row_factory = sqlite3.Row

    logger.debug(f"Read-only SQLite connection created for {database}")

    return conn
