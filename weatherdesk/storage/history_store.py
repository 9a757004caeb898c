"""Search history store: serialized access to the history table."""

import logging
import sqlite3
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from weatherdesk.errors import PersistenceError
from weatherdesk.models.common import normalize_city, utc_now
from weatherdesk.storage import history_repo
from weatherdesk.storage.database import connect, run_migrations

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 4


class SearchHistoryStore:
    """Owns the history database; one connection per operation, one at a time."""

    def __init__(
        self,
        db_path: str | Path,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.db_path = db_path
        self.clock = clock
        self._lock = threading.Lock()
        self._migrated = False

    @contextmanager
    def _connection(self, action: str) -> Iterator[sqlite3.Connection]:
        with self._lock:
            conn = None
            try:
                conn = connect(self.db_path)
                if not self._migrated:
                    run_migrations(conn)
                    self._migrated = True
                yield conn
            except (sqlite3.Error, OSError) as e:
                raise PersistenceError(f"Failed to {action}", str(e)) from e
            finally:
                if conn is not None:
                    conn.close()

    def initialize(self) -> None:
        """Create the schema up front so startup fails fast on a bad path."""
        with self._connection("initialize history"):
            pass

    def record_search(self, city: str) -> bool:
        """Upsert a city's last-searched time. Never raises.

        Returns True when the record was written.
        """
        key = normalize_city(city)
        if not key:
            return False
        searched_at = self.clock().isoformat(timespec="microseconds")
        try:
            with self._connection("update search history") as conn:
                history_repo.upsert_search(conn, key, searched_at)
        except PersistenceError:
            logger.exception("Failed to update search history for %s", key)
            return False
        return True

    def recent_history(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[str]:
        """Up to `limit` distinct cities, most recent first, lowercase."""
        with self._connection("fetch history") as conn:
            return history_repo.get_recent_cities(conn, limit)

    def clear_history(self) -> int:
        with self._connection("clear history") as conn:
            removed = history_repo.delete_all(conn)
        logger.info("Cleared %d history records", removed)
        return removed

    def cities_with_prefix(self, prefix: str, limit: int) -> list[str]:
        with self._connection("search history") as conn:
            return history_repo.find_by_prefix(conn, prefix, limit)

    def ping(self) -> bool:
        try:
            with self._connection("reach history store") as conn:
                conn.execute("SELECT 1")
            return True
        except PersistenceError:
            return False
