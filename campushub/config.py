"""Campus hub configuration parameters."""

from os import environ
import warnings

LOGLEVEL = int(environ.get('LOGLEVEL', '20'))
"""
Logging verbosity.

See `https://docs.python.org/3/library/logging.html#levels`_.
"""

ADMIN_TOKEN = environ.get('ADMIN_TOKEN', '')
"""
Shared secret for admin-only endpoints.

Compared against the ``X-Admin-Token`` request header. An empty value
disables the admin endpoints entirely.
"""

if not ADMIN_TOKEN:
    warnings.warn('ADMIN_TOKEN is not set; admin endpoints will reject all'
                  ' requests!')

# --- STORE CONFIGURATION ---

STORE_BACKEND = environ.get('STORE_BACKEND', 'redis')
"""
Key-value store backend; one of ``redis`` or ``memory``.

The ``memory`` backend keeps state in the process and is lost on restart. It
is here for local development and tests.
"""

REDIS_URL = environ.get('REDIS_URL', 'redis://localhost:6379/0')
"""Connection URL for the Redis store."""

STORE_NAMESPACE = environ.get('STORE_NAMESPACE', 'qc-hub')
"""Prefix for all keys written to the store."""

# --- UPTIME MONITORING ---

UPTIME_MIN_INTERVAL = int(environ.get('UPTIME_MIN_INTERVAL', '60'))
"""Minimum number of seconds between two monitor sweeps."""

UPTIME_PROBE_TIMEOUT = float(environ.get('UPTIME_PROBE_TIMEOUT', '8'))
"""Timeout (seconds) for each monitor probe."""

# --- CALENDAR FEED ---

ICAL_URL = environ.get('ICAL_URL', '')
"""URL of the upstream iCalendar feed."""

CALENDAR_FETCH_TIMEOUT = float(environ.get('CALENDAR_FETCH_TIMEOUT', '10'))
"""Timeout (seconds) when fetching the calendar feed."""

CALENDAR_CACHE_TTL = int(environ.get('CALENDAR_CACHE_TTL', '900'))
"""Number of seconds for which a fetched calendar is served from the store."""

CALENDAR_WINDOW_DAYS = int(environ.get('CALENDAR_WINDOW_DAYS', '7'))
"""Number of days after today to include in the calendar view."""

CALENDAR_MAX_EVENTS = int(environ.get('CALENDAR_MAX_EVENTS', '30'))
"""Maximum number of events returned from the calendar view."""

PORTAL_TIMEZONE = environ.get('PORTAL_TIMEZONE', 'US/Eastern')
"""
Timezone used to decide where "today" begins and ends.

Also applied to floating times and all-day dates in the calendar feed.
"""
