"""
Application package initializer.

The service is split into ``core`` (configuration, logging, errors,
validation, storage and authentication), ``services`` (list rules),
``schemas`` (pydantic payloads) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
