"""Time utilities. All datetimes in UTC."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601, the form stored in vector payloads."""
    return utc_now().isoformat()
