"""
Numeric helpers shared by the aggregation operations.
"""
from datetime import datetime, timezone


def mean_or_zero(total: float, count: int) -> float:
    """Arithmetic mean, or 0.0 for an empty bucket."""
    if count == 0:
        return 0.0
    return total / count


def round1(value: float) -> float:
    """Round a full-precision figure to one decimal place."""
    return round(value, 1)


def as_percent(fraction: float) -> float:
    return fraction * 100


def utc_hour(timestamp: datetime) -> int:
    """Hour of day (0-23) in UTC; naive timestamps are taken as UTC."""
    if timestamp.tzinfo is None:
        return timestamp.hour
    return timestamp.astimezone(timezone.utc).hour
