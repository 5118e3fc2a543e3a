import uuid
from datetime import UTC, datetime, timedelta
from typing import Optional


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from stores that drop tzinfo."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def expiry_after(now: datetime, ttl: timedelta) -> datetime:
    """now + ttl truncated to whole seconds, the precision of a JWT exp claim."""
    return (now + ttl).replace(microsecond=0)
