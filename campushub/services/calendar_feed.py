"""
Integration with the upstream iCalendar feed.

Fetching and parsing only; windowing and caching are handled by
:mod:`campushub.calendar_cache`.
"""

import logging
from datetime import datetime, date, time, tzinfo
from typing import List, Optional, Any

import requests
from icalendar import Calendar

from ..domain import CalendarEvent
from ..exceptions import UpstreamFetchError
from .probe import is_success

logger = logging.getLogger(__name__)

DEFAULT_TITLE = 'Event'


def fetch_feed(url: str, timeout: float) -> bytes:
    """
    Retrieve the raw feed content.

    Raises
    ------
    :class:`.UpstreamFetchError`
        Raised if the feed cannot be reached or does not respond with 2xx.

    """
    try:
        response = requests.get(url, timeout=timeout, allow_redirects=True)
    except requests.exceptions.RequestException as e:
        raise UpstreamFetchError(f'iCal fetch failed: {e}') from e
    if not is_success(response.status_code):
        raise UpstreamFetchError(
            f'iCal fetch failed: {response.status_code}'
        )
    content: bytes = response.content
    return content


def parse_events(content: bytes, local_tz: tzinfo) -> List[CalendarEvent]:
    """
    Parse the ``VEVENT`` components of a feed.

    An entry that cannot be interpreted is skipped and logged; it does not
    prevent the other entries from being returned. Entries without a start
    time are ignored.

    Parameters
    ----------
    content : bytes
        Raw iCalendar data.
    local_tz : tzinfo
        A pytz timezone, applied to floating times and all-day dates.

    Raises
    ------
    :class:`.UpstreamFetchError`
        Raised if the feed as a whole is not a calendar.

    """
    try:
        calendar = Calendar.from_ical(content)
    except ValueError as e:
        raise UpstreamFetchError(f'Could not parse iCal feed: {e}') from e

    events: List[CalendarEvent] = []
    for component in calendar.walk('VEVENT'):
        try:
            event = _to_event(component, local_tz)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning('Skipping malformed calendar entry: %s', e)
            continue
        if event is not None:
            events.append(event)
    return events


def _to_event(component: Any, local_tz: tzinfo) -> Optional[CalendarEvent]:
    dtstart = component.get('DTSTART')
    if dtstart is None:
        return None
    dtend = component.get('DTEND')
    summary = component.get('SUMMARY')
    location = component.get('LOCATION')
    return CalendarEvent(
        title=str(summary) if summary else DEFAULT_TITLE,
        start=_as_datetime(dtstart.dt, local_tz),
        end=_as_datetime(dtend.dt, local_tz) if dtend is not None else None,
        location=str(location) if location else None
    )


# All-day events have a date rather than a datetime; they begin at local
# midnight.
def _as_datetime(value: Any, local_tz: tzinfo) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return local_tz.localize(value)   # type: ignore
        return value
    if isinstance(value, date):
        return local_tz.localize(datetime.combine(value, time.min))  # type: ignore
    raise TypeError(f'Not a date or datetime: {value!r}')
