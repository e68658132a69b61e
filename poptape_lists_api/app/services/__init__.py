"""
Service layer.

Services hold the list rules (ordering, deduplication, size bound and
document lifecycle) and talk to storage only through ``core.db``
collections, keeping the API handlers free of persistence details.
"""
