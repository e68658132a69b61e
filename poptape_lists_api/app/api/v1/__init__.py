"""
Version 1 of the API.

Breaking changes to the list routes belong in a new version subpackage.
"""
