"""Helpers for tests."""

from contextlib import contextmanager
from datetime import datetime
from typing import Optional, Iterator, Iterable

from flask import Flask
from pytz import UTC

from ..services import store


@contextmanager
def in_memory_store(app: Optional[Flask] = None,
                    **config: object) -> Iterator[store.BaseStore]:
    """Provide an in-memory store, in an application context."""
    if app is None:
        app = Flask('test')
    app.config['STORE_BACKEND'] = 'memory'
    app.config['STORE_NAMESPACE'] = 'test'
    app.config.update(config)

    with app.app_context():
        store.init_app(app)
        yield store.current_store()


def utc(*args: int) -> datetime:
    """Build a tz-aware UTC datetime."""
    return datetime(*args, tzinfo=UTC)


def make_feed(*events: Iterable[str]) -> bytes:
    """Build an iCalendar document with one ``VEVENT`` per item."""
    lines = ['BEGIN:VCALENDAR', 'VERSION:2.0', 'PRODID:-//Campus Hub//Test//EN']
    for i, event in enumerate(events):
        lines.append('BEGIN:VEVENT')
        lines.append(f'UID:event-{i}@test')
        lines.extend(event)
        lines.append('END:VEVENT')
    lines.append('END:VCALENDAR')
    return ('\r\n'.join(lines) + '\r\n').encode('utf-8')
