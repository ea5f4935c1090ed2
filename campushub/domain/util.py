"""Helpers and utilities."""

from typing import Optional, Union
from datetime import datetime

from dateutil.parser import parse as parse_date
from pytz import UTC


def get_tzaware_utc_now() -> datetime:
    """Generate a datetime for the current moment in UTC."""
    return datetime.now(UTC)


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Coerce a stored timestamp to a tz-aware :class:`datetime`.

    Naive values are assumed to be in UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = parse_date(value)
    if parsed.tzinfo is None:
        parsed = UTC.localize(parsed)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Render a tz-aware datetime as an ISO-8601 string in UTC."""
    return value.astimezone(UTC).isoformat()
