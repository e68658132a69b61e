"""
List endpoints for API v1.

Two routes are public: the service status and the count of users
watching an item.  Every other route authenticates the caller through
the identity service first and then validates the list type and
parameters before touching storage.

The handlers are plain functions: FastAPI runs them in its threadpool,
which suits the blocking identity call and SQLite access.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from poptape_lists_api.app.core.config import settings
from poptape_lists_api.app.core.security import get_current_identity
from poptape_lists_api.app.core.validation import (
    canonical_uuid,
    resolve_list_type,
    validate_limit,
    validate_offset,
)
from poptape_lists_api.app.schemas.list import ItemRequest, MessageResponse, StatusResponse, WatchingResponse
from poptape_lists_api.app.services.list_service import ListService
from poptape_lists_api.app.services.watch_service import WatchService

logger = logging.getLogger(__name__)

router = APIRouter()


# Public routes are declared first so that ``/status`` and
# ``/watching/{item_id}`` are not captured by ``/{list_type}``.

@router.get("/status", response_model=StatusResponse)
def get_status() -> StatusResponse:
    """Report that the service is up, with its version."""
    return StatusResponse(message="System running...", version=settings.api_version)


@router.get("/watching/{item_id}", response_model=WatchingResponse)
def get_watching_count(item_id: str) -> WatchingResponse:
    """Return how many users currently have ``item_id`` in their watchlist."""
    return WatchingResponse(people_watching=WatchService.count_watchers(item_id))


@router.get("/{list_type}", response_model=Dict[str, Any])
def get_all_from_list(
    list_type: str,
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    public_id: str = Depends(get_current_identity),
) -> Dict[str, Any]:
    """Return the caller's items for ``list_type``, newest first.

    - **limit**: page size, defaults to ``DEFAULT_PAGE_LIMIT`` and is
      clamped to ``MAX_PAGE_LIMIT``.
    - **offset**: number of items to skip.

    Responds 404 when the caller has no such list.
    """
    list_type = resolve_list_type(list_type)
    page_limit = validate_limit(limit, settings.default_page_limit, settings.max_page_limit)
    page_offset = validate_offset(offset)
    user_list = ListService.lookup(public_id, list_type)
    return {list_type: user_list.item_ids[page_offset:page_offset + page_limit]}


@router.post("/{list_type}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def add_to_list(
    list_type: str,
    body: ItemRequest,
    public_id: str = Depends(get_current_identity),
) -> MessageResponse:
    """Add one item to the caller's list; adding a present item is accepted."""
    list_type = resolve_list_type(list_type)
    item_id = canonical_uuid(body.uuid)
    ListService.add_item(public_id, list_type, item_id)
    return MessageResponse(message="Created")


@router.delete("/{list_type}/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_item_from_list(
    list_type: str,
    item_id: str,
    public_id: str = Depends(get_current_identity),
) -> Response:
    """Remove one item from the caller's list; absent items are ignored."""
    list_type = resolve_list_type(list_type)
    ListService.remove_item(public_id, list_type, canonical_uuid(item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{list_type}", status_code=status.HTTP_204_NO_CONTENT)
def remove_all_from_list(
    list_type: str,
    public_id: str = Depends(get_current_identity),
) -> Response:
    """Delete the caller's whole list."""
    list_type = resolve_list_type(list_type)
    ListService.clear_list(public_id, list_type)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
