"""
The status board: admin-written cards plus automated monitor results.

There is exactly one :class:`.StatusDocument`. It is created with a default
(no cards, two seeded monitors) the first time that it is read.

Admin edits replace whole fields. Callers must send the complete list that
they want to keep; items left out of the list are dropped. To guard against
two admins overwriting each other, an edit may carry the ``revision`` that it
was based on. An edit based on an outdated revision is rejected with
:class:`.ConflictError`. Edits without a revision are applied
unconditionally (last writer wins).
"""

import logging
from typing import Optional, List, Iterable

from .domain import StatusDocument, ManualStatusItem, Monitor
from .exceptions import ConflictError, ValidationError
from .services import store

logger = logging.getLogger(__name__)

STATE_KEY = 'hub-state'


def default_status() -> StatusDocument:
    """Generate the document used before anything has been stored."""
    return StatusDocument(monitors=[
        Monitor(
            monitor_id='qc-ical',
            name='Queens College Calendar Feed',
            target_url='https://www.calendarwiz.com/CalendarWiz_iCal.php'
                       '?crd=queenscollege'
        ),
        Monitor(
            monitor_id='cunyfirst',
            name='CUNYfirst Page',
            target_url='https://www.cuny.edu/about/administration/offices/'
                       'cis/cunyfirst/'
        )
    ])


def get_status() -> StatusDocument:
    """
    Get the current status document.

    The default document is persisted on first use, so that later reads and
    writes see the same seeded monitors. Existing data is never re-seeded.
    """
    data = store.current_store().get_json(STATE_KEY)
    if data is None:
        logger.info('No status document found; seeding default')
        document = default_status()
        save_status(document)
        return document
    return StatusDocument.from_dict(data)


def save_status(document: StatusDocument) -> None:
    """Persist the status document."""
    store.current_store().set_json(STATE_KEY, document.to_dict())


def update_status(manual_items: Optional[List[ManualStatusItem]] = None,
                  monitors: Optional[List[Monitor]] = None,
                  revision: Optional[int] = None) -> StatusDocument:
    """
    Replace the manual status cards and/or the monitor list.

    Monitor results and the time of the last sweep are left alone.

    Parameters
    ----------
    manual_items : list or None
        If provided, the complete new list of cards, in display order.
    monitors : list or None
        If provided, the complete new list of monitors.
    revision : int or None
        If provided, the :attr:`.StatusDocument.revision` that the caller
        last saw.

    Returns
    -------
    :class:`.StatusDocument`
        The document as persisted.

    Raises
    ------
    :class:`.ValidationError`
        Raised if ids are repeated within either list.
    :class:`.ConflictError`
        Raised if ``revision`` does not match the stored document.

    """
    if manual_items is not None:
        _check_unique(item.item_id for item in manual_items)
    if monitors is not None:
        _check_unique(monitor.monitor_id for monitor in monitors)

    document = get_status()
    if revision is not None and revision != document.revision:
        raise ConflictError(f'Status was changed since revision {revision};'
                            f' current revision is {document.revision}')
    if manual_items is not None:
        document.manual_items = list(manual_items)
    if monitors is not None:
        document.monitors = list(monitors)
    document.revision += 1
    save_status(document)
    logger.info('Updated status document to revision %i', document.revision)
    return document


def _check_unique(identifiers: Iterable[str]) -> None:
    seen = set()
    for identifier in identifiers:
        if identifier in seen:
            raise ValidationError(f'Duplicate id: {identifier}')
        seen.add(identifier)
