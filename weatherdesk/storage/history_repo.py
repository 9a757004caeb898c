"""Repository for search history records."""

import sqlite3


def upsert_search(conn: sqlite3.Connection, city: str, searched_at: str) -> None:
    """Insert a city or refresh its timestamp. `city` must already be normalized."""
    conn.execute(
        "INSERT INTO search_history (city, searched_at) VALUES (?, ?) "
        "ON CONFLICT(city) DO UPDATE SET searched_at = excluded.searched_at",
        (city, searched_at),
    )
    conn.commit()


def get_recent_cities(conn: sqlite3.Connection, limit: int) -> list[str]:
    """Most recently searched cities first."""
    rows = conn.execute(
        "SELECT city FROM search_history "
        "ORDER BY searched_at DESC, city ASC LIMIT ?",
        (limit,),
    ).fetchall()
    return [r["city"] for r in rows]


def find_by_prefix(conn: sqlite3.Connection, prefix: str, limit: int) -> list[str]:
    """Cities whose key starts with `prefix`, alphabetically.

    Compares with substr() so '%' and '_' in user input match literally.
    """
    rows = conn.execute(
        "SELECT city FROM search_history "
        "WHERE substr(city, 1, ?) = ? ORDER BY city ASC LIMIT ?",
        (len(prefix), prefix, limit),
    ).fetchall()
    return [r["city"] for r in rows]


def delete_all(conn: sqlite3.Connection) -> int:
    """Delete every record. Returns the number removed."""
    cursor = conn.execute("DELETE FROM search_history")
    conn.commit()
    return cursor.rowcount
