"""
Top-level package for the Poptape Lists API.

All functionality lives in submodules under ``app``; importing
``poptape_lists_api.app`` builds the ASGI application.
"""

__all__ = []
