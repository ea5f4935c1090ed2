"""Web Server Gateway Interface entry-point."""

import logging
import os
from typing import Optional

from flask import Flask

from campushub.factory import create_web_app

logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')

CONFIG_KEYS = (
    'LOGLEVEL', 'ADMIN_TOKEN', 'STORE_BACKEND', 'REDIS_URL', 'STORE_NAMESPACE',
    'UPTIME_MIN_INTERVAL', 'UPTIME_PROBE_TIMEOUT', 'ICAL_URL',
    'CALENDAR_FETCH_TIMEOUT', 'CALENDAR_CACHE_TTL', 'CALENDAR_WINDOW_DAYS',
    'CALENDAR_MAX_EVENTS', 'PORTAL_TIMEZONE'
)
"""Settings in ``campushub/config.py`` that may be passed in the environ."""

__app__: Optional[Flask] = None


def application(environ, start_response):
    """WSGI application factory."""
    global __app__
    for key in CONFIG_KEYS:
        if key not in environ:
            continue
        value = str(environ[key])
        os.environ[key] = value
        if __app__ is not None:
            # Keep the type that config.py gave the setting.
            __app__.config[key] = type(__app__.config[key])(value)
    if __app__ is None:
        __app__ = create_web_app()
    return __app__(environ, start_response)
