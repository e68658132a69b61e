"""
Business logic for per-user item lists.

Each (user, list type) pair owns at most one document.  Items are kept
newest first, without duplicates and capped at ``MAX_LIST_ITEMS``; a
document whose last item goes away is deleted rather than left empty.

Every mutation is a single read-modify-write of one document performed
inside an immediate transaction, so two concurrent additions for the
same user and list never overwrite each other.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from ..core.db import open_collection
from ..core.errors import NotFound
from ..core.validation import canonical_uuid
from ..schemas.list import UserList

logger = logging.getLogger(__name__)

MAX_LIST_ITEMS = 50


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def prepend_bounded(item_ids: List[str], item_id: str, limit: int = MAX_LIST_ITEMS) -> List[str]:
    """Return ``item_ids`` with ``item_id`` in front, truncated to ``limit``."""
    return ([item_id] + item_ids)[:limit]


class ListService:
    """Service for reading and mutating users' lists.

    ``list_type`` arguments are expected to be normalised already (see
    ``core.validation.resolve_list_type``); item ids are canonicalised
    here so that differently cased spellings of one UUID never coexist.
    """

    @classmethod
    def lookup(cls, public_id: str, list_type: str) -> UserList:
        """Return the user's document for ``list_type`` or raise :class:`NotFound`."""
        with open_collection(list_type) as collection:
            document = collection.find_one(public_id)
        if document is None:
            raise NotFound(f"Could not find any {list_type} for current user")
        return UserList(**document)

    @classmethod
    def add_item(cls, public_id: str, list_type: str, item_id: str) -> UserList:
        """Add ``item_id`` to the front of the user's list.

        Creates the document on first use.  Adding an id that is already
        present changes nothing.  When the list grows past
        ``MAX_LIST_ITEMS`` the oldest entries are dropped.
        """
        item_id = canonical_uuid(item_id)
        now = _now()
        with open_collection(list_type, write=True) as collection:
            document = collection.find_one(public_id)
            if document is None:
                document = {
                    "id": public_id,
                    "item_ids": [item_id],
                    "created_at": now,
                    "updated_at": now,
                }
                collection.insert_one(document)
                logger.info("Created %s for %s", list_type, public_id)
                return UserList(**document)

            if item_id in document["item_ids"]:
                return UserList(**document)

            document["item_ids"] = prepend_bounded(document["item_ids"], item_id)
            document["updated_at"] = now
            collection.update_one(public_id, document["item_ids"], now)
        return UserList(**document)

    @classmethod
    def remove_item(cls, public_id: str, list_type: str, item_id: str) -> Optional[UserList]:
        """Remove ``item_id`` from the user's list.

        An empty ``item_id`` clears the whole list.  Removing an id that
        is not present (or from a list that does not exist) is a no-op.
        Returns the remaining list, or ``None`` once the document is gone.
        """
        if item_id == "":
            cls.clear_list(public_id, list_type)
            return None

        item_id = canonical_uuid(item_id)
        with open_collection(list_type, write=True) as collection:
            document = collection.find_one(public_id)
            if document is None:
                return None
            if item_id not in document["item_ids"]:
                return UserList(**document)

            remaining = [existing for existing in document["item_ids"] if existing != item_id]
            if not remaining:
                collection.delete_one(public_id)
                logger.info("Deleted empty %s for %s", list_type, public_id)
                return None

            now = _now()
            collection.update_one(public_id, remaining, now)
            document["item_ids"] = remaining
            document["updated_at"] = now
        return UserList(**document)

    @classmethod
    def clear_list(cls, public_id: str, list_type: str) -> bool:
        """Delete the user's whole list; returns whether a document existed."""
        with open_collection(list_type, write=True) as collection:
            deleted = collection.delete_one(public_id)
        if deleted:
            logger.info("Cleared %s for %s", list_type, public_id)
        return bool(deleted)
