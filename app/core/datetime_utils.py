from datetime import UTC, datetime
from typing import Annotated

from pydantic.functional_serializers import PlainSerializer


def ensure_utc(v: datetime) -> datetime:
    """Treat naive datetimes read back from the database as UTC."""
    if v.tzinfo is None:
        return v.replace(tzinfo=UTC)
    return v


def _serialize_utc_datetime(v: datetime | None) -> str | None:
    if v is None:
        return None
    return ensure_utc(v).isoformat()


UTCDatetime = Annotated[datetime, PlainSerializer(_serialize_utc_datetime)]
