"""SQLite database connection and schema management.

Provides get_db_connection() context manager and init_db() for schema creation.
Stores the queries table and the ordered results of each query.
"""

import sqlite3
from typing import Optional
from ..config import get_settings
from contextlib import contextmanager

@contextmanager
def get_db_connection(db_path: Optional[str] = None):
    conn = sqlite3.connect(db_path or get_settings().DB_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    finally:
        conn.close()

def init_db(db_path: Optional[str] = None):
    schema = """
    CREATE TABLE IF NOT EXISTS queries (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        query TEXT NOT NULL,
        created_at TEXT NOT NULL,
        result_count INTEGER DEFAULT 0,
        succeeded TEXT,
        failures TEXT
    );

    CREATE TABLE IF NOT EXISTS results (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        query_id INTEGER NOT NULL,
        position INTEGER NOT NULL,
        source TEXT NOT NULL,
        title TEXT,
        url TEXT,
        content TEXT,
        FOREIGN KEY(query_id) REFERENCES queries(id) ON DELETE CASCADE
    );

    CREATE INDEX IF NOT EXISTS idx_results_query ON results(query_id, position);
    """
    with get_db_connection(db_path) as conn:
        conn.executescript(schema)
        conn.commit()
