"""
Endpoint subpackage for API v1.

Each module defines an APIRouter aggregated in ``router.py``.
"""
