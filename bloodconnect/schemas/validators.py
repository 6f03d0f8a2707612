"""Shared pre-validation helpers for request bodies."""
from datetime import datetime, timedelta, timezone

# Tolerated difference between a browser clock and the server clock
CLOCK_SKEW = timedelta(minutes=5)

def strip_text(value):
    if isinstance(value, str):
        return value.strip()
    return value

def blank_to_none(value):
    """Forms post optional fields as empty strings; treat those as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value

def not_in_future(value):
    """Reject dates after now. Naive values are read as UTC."""
    if value is None:
        return value
    as_utc = value.astimezone(timezone.utc).replace(tzinfo=None) if value.tzinfo else value
    if as_utc > datetime.utcnow() + CLOCK_SKEW:
        raise ValueError("Date cannot be in the future")
    return value
