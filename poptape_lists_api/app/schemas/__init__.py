"""
Pydantic schema definitions for API payloads.

Stored documents and request/response bodies are modelled separately
from the SQLite rows so the API representation does not leak storage
details.
"""
