"""Configuration, logging, errors, validation, storage and authentication."""
