"""
External integrations layer for the catalog bridge.

This module isolates the query engine dependency from the catalog logic,
providing a clean seam that tests replace with in-memory fakes.
"""

__all__ = ["spark"]
