"""
Pydantic models for list documents and API payloads.

``UserList`` mirrors one stored document.  The request and response
models describe the bodies exchanged on the ``/list`` routes; the body
returned when reading a list is keyed by the list type itself and is
therefore built as a plain dict by the endpoint.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserList(BaseModel):
    """One user's membership set for one list type."""

    id: str = Field(..., json_schema_extra={"example": "5c5e0b2c-2d5f-4b0e-9d8e-4e0f6a1b2c3d"})
    item_ids: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ItemRequest(BaseModel):
    """Body of a request adding one item to a list."""

    uuid: str = Field(..., json_schema_extra={"example": "f47ac10b-58cc-4372-a567-0e02b2c3d479"})


class WatchingResponse(BaseModel):
    people_watching: int = Field(..., ge=0, json_schema_extra={"example": 3})


class MessageResponse(BaseModel):
    message: str


class StatusResponse(BaseModel):
    message: str = Field(..., json_schema_extra={"example": "System running..."})
    version: Optional[str] = Field(None, json_schema_extra={"example": "1.0.0"})
