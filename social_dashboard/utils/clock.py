# social_dashboard/utils/clock.py
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    # naive UTC, the form every timestamp column is stored in
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
