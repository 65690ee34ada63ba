"""
Error hierarchy for the catalog bridge.

Every failure surfaced to callers carries an ``ErrorKind`` so the HTTP layer
and other callers can tell a missing table from an unreachable engine without
inspecting messages.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Failure categories surfaced by the bridge."""
    NOT_FOUND = "NotFound"
    ENGINE_UNAVAILABLE = "EngineUnavailable"
    UNSUPPORTED = "Unsupported"


class MetadataBridgeError(Exception):
    """Base exception for all catalog bridge errors."""

    kind: ErrorKind

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class TableNotFoundError(MetadataBridgeError):
    """Raised when a database or table is absent from the engine catalog."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, database: Optional[str], table: Optional[str] = None):
        self.database = database
        self.table = table
        target = f"{database}.{table}" if table else f"{database}"
        super().__init__(f"{target} not found in engine catalog")


class EngineUnavailableError(MetadataBridgeError):
    """Raised when the engine session cannot be reached or a query fails."""

    kind = ErrorKind.ENGINE_UNAVAILABLE


class UnsupportedOperationError(MetadataBridgeError):
    """Raised by operations this source intentionally does not implement."""

    kind = ErrorKind.UNSUPPORTED
