"""Initial schema: search history keyed by normalized city."""

import sqlite3

DDL = [
    """
    CREATE TABLE IF NOT EXISTS search_history (
        city TEXT PRIMARY KEY,
        searched_at TEXT NOT NULL
    )
    """,
    (
        "CREATE INDEX IF NOT EXISTS idx_search_history_searched_at "
        "ON search_history(searched_at)"
    ),
]


def up(conn: sqlite3.Connection) -> None:
    for stmt in DDL:
        conn.execute(stmt)
    conn.commit()
