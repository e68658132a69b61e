"""
Top-level router for version 1 of the API.

The list routes are served under ``/list`` without a version prefix.
"""

from fastapi import APIRouter

from .endpoints import lists

router = APIRouter()

router.include_router(lists.router, prefix="/list", tags=["lists"])
