from datetime import datetime, timezone


def to_utc_naive(dt: datetime) -> datetime:
    """Stay boundaries are stored as naive UTC."""
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def utc_naive_to_aware(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc)
