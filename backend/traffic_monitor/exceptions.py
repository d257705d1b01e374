"""
Exceptions raised by the Traffic Monitor backend.
"""
from typing import Optional


class TrafficMonitorError(Exception):
    """Base exception for all Traffic Monitor errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DataAccessError(TrafficMonitorError):
    """Raised when the record store is unreachable or a query fails."""
    pass


class RecordValidationError(TrafficMonitorError):
    """Raised when an incoming vehicle detection record is malformed."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        self.field_name = field_name
        super().__init__(message)
