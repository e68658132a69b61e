"""Aggregate counts over all users' watchlists."""

from ..core.db import open_collection
from ..core.validation import WATCHLIST, canonical_uuid


class WatchService:
    """Service answering how many users are watching an item."""

    @classmethod
    def count_watchers(cls, item_id: str) -> int:
        """Return the number of watchlists containing ``item_id`` (0 if none)."""
        item_id = canonical_uuid(item_id)
        with open_collection(WATCHLIST) as collection:
            return collection.count_containing(item_id)
