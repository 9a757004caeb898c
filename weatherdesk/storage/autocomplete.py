"""Prefix suggestions over recorded city searches."""

from weatherdesk.models.common import normalize_city
from weatherdesk.storage.history_store import SearchHistoryStore

DEFAULT_SUGGESTION_LIMIT = 5


def capitalize_first(city: str) -> str:
    """Uppercase only the first character: 'los angeles' -> 'Los angeles'."""
    return city[:1].upper() + city[1:]


class AutocompletePrefixIndex:
    """Suggests previously searched cities, alphabetically by stored key."""

    def __init__(
        self, store: SearchHistoryStore, limit: int = DEFAULT_SUGGESTION_LIMIT
    ):
        self.store = store
        self.limit = limit

    def suggest(self, query: str | None) -> list[str]:
        prefix = normalize_city(query or "")
        if not prefix:
            return []
        return [
            capitalize_first(city)
            for city in self.store.cities_with_prefix(prefix, self.limit)
        ]
