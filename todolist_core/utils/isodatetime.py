"""ISO 8601 and Unix timestamp conversion utilities.

All timestamps stored in the database are ISO 8601 UTC strings with a
trailing "Z". JWT claims (iat, exp) use integer Unix seconds.
"""

from datetime import datetime, UTC


def to_timestamp(dt: datetime, timespec: str = "auto") -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec=timespec).replace("+00:00", "Z")


def to_datetime(timestamp: str) -> datetime:
    """Convert ISO 8601 UTC timestamp string to datetime."""
    return datetime.fromisoformat(timestamp.replace('Z', '+00:00'))


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string.

    Always carries microseconds so stored timestamps sort lexicographically.
    """
    return to_timestamp(datetime.now(UTC), timespec="microseconds")


def to_unix(dt: datetime) -> int:
    """Convert datetime to integer Unix timestamp (seconds)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())


def from_unix(ts: int) -> datetime:
    """Convert integer Unix timestamp to timezone-aware UTC datetime."""
    return datetime.fromtimestamp(ts, UTC)


def now_unix() -> int:
    """Get current time as integer Unix timestamp."""
    return to_unix(datetime.now(UTC))
