import sqlite3
from contextlib import contextmanager

from . import config


@contextmanager
def get_db_connection():
    """Context manager yielding a row-factory SQLite connection."""
    conn = sqlite3.connect(config.DB_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    except Exception as exc:
        conn.rollback()
        config.logger.error("Database operation failed: %s", exc)
        raise
    finally:
        conn.close()
