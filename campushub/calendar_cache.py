"""
Near-term events from the campus calendar feed.

The feed is fetched at most once per ``CALENDAR_CACHE_TTL`` seconds. Parsed
events are kept in the store (not in process memory) together with the time
at which they were fetched. If the feed cannot be fetched when the cache has
expired, the error goes to the caller; stale events are never served past
their TTL.
"""

import logging
from datetime import datetime, timedelta, time, tzinfo
from typing import List, Optional, Tuple

from flask import current_app
from pytz import timezone
from typing_extensions import Literal

from .domain import CalendarEvent, CalendarCacheEntry
from .domain.util import get_tzaware_utc_now
from .exceptions import ConfigurationError, UpstreamFetchError
from .services import store, calendar_feed

logger = logging.getLogger(__name__)

CACHE_KEY = 'calendar-cache'

Source = Literal['cache', 'live']


def get_window(now: datetime, local_tz: tzinfo,
               days: int) -> Tuple[datetime, datetime]:
    """
    Get the bounds of the calendar view.

    The view runs from the start of today to the end of the day ``days``
    days from now, both inclusive, in ``local_tz``.
    """
    today = now.astimezone(local_tz).date()
    last_day = today + timedelta(days=days)
    start = local_tz.localize(datetime.combine(today, time.min))  # type: ignore
    end = local_tz.localize(datetime.combine(last_day, time.max))  # type: ignore
    return start, end


def select_events(events: List[CalendarEvent], start: datetime,
                  end: datetime, limit: int) -> List[CalendarEvent]:
    """Keep the first ``limit`` events that start within the window."""
    selected = [event for event in events if start <= event.start <= end]
    selected.sort(key=lambda event: event.start)
    return selected[:limit]


def load_cached() -> Optional[CalendarCacheEntry]:
    """Load the cache entry, if there is a usable one."""
    data = store.current_store().get_json(CACHE_KEY)
    if data is None:
        return None
    try:
        return CalendarCacheEntry.from_dict(data)
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        logger.warning('Discarding unreadable calendar cache: %s', e)
        return None


def get_events(now: Optional[datetime] = None) \
        -> Tuple[Source, List[CalendarEvent]]:
    """
    Get the events in the calendar view.

    Parameters
    ----------
    now : datetime or None
        Defaults to the current time.

    Returns
    -------
    str
        ``cache`` if the events came from the store, otherwise ``live``.
    list
        At most ``CALENDAR_MAX_EVENTS`` :class:`.CalendarEvent` instances,
        sorted by start time.

    Raises
    ------
    :class:`.ConfigurationError`
        Raised if no feed URL is configured.
    :class:`.UpstreamFetchError`
        Raised if the cache has expired and the feed cannot be fetched.

    """
    config = current_app.config
    url = config.get('ICAL_URL')
    if not url:
        raise ConfigurationError('Missing ICAL_URL')
    ttl = timedelta(seconds=config.get('CALENDAR_CACHE_TTL', 900))
    if now is None:
        now = get_tzaware_utc_now()
    local_tz = timezone(config.get('PORTAL_TIMEZONE', 'US/Eastern'))
    start, end = get_window(now, local_tz,
                            config.get('CALENDAR_WINDOW_DAYS', 7))
    limit = config.get('CALENDAR_MAX_EVENTS', 30)

    cached = load_cached()
    if cached is not None and now - cached.fetched_at < ttl:
        logger.debug('Calendar cache hit; fetched at %s', cached.fetched_at)
        # The local day may have rolled over since the fetch.
        return 'cache', select_events(cached.events, start, end, limit)

    logger.debug('Calendar cache miss; fetching %s', url)
    try:
        content = calendar_feed.fetch_feed(
            url, config.get('CALENDAR_FETCH_TIMEOUT', 10)
        )
    except UpstreamFetchError as e:
        logger.error('Could not refresh calendar: %s', e)
        raise
    events = select_events(calendar_feed.parse_events(content, local_tz),
                           start, end, limit)
    entry = CalendarCacheEntry(fetched_at=now, events=events)
    store.current_store().set_json(CACHE_KEY, entry.to_dict())
    return 'live', events
