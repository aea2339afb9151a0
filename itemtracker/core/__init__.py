"""
Core utilities shared across the item tracker.

This package hosts configuration helpers (env vars, default paths), logging
setup and small date/path helpers used by the persistence layer.
"""
