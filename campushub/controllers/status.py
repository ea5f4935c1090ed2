"""Controllers for the status board and the monitor sweep."""

from http import HTTPStatus
from typing import Optional, Dict, Any

from werkzeug.exceptions import BadRequest, Conflict

from ..domain import ManualStatusItem, Monitor
from ..exceptions import ValidationError, ConflictError
from .. import status, uptime
from .util import validate_request, Response


def get_status() -> Response:
    """Get the current status document. Public."""
    document = status.get_status()
    return {'ok': True, 'state': document.to_dict()}, HTTPStatus.OK, {}


@validate_request('status_update.json')
def update_status(data: Dict[str, Any]) -> Response:
    """
    Replace the manual status cards and/or the monitor list.

    Parameters
    ----------
    data : dict
        Request body; may contain ``manualItems``, ``monitors``, and
        ``revision``.

    Returns
    -------
    dict
        Response data.
    int
        HTTP status code.
    dict
        Headers to add to the response.

    """
    manual_items: Optional[list] = None
    monitors: Optional[list] = None
    try:
        if 'manualItems' in data:
            manual_items = [ManualStatusItem.from_dict(item)
                            for item in data['manualItems']]
        if 'monitors' in data:
            monitors = [Monitor.from_dict(monitor)
                        for monitor in data['monitors']]
    except (KeyError, ValueError, OverflowError) as e:
        raise BadRequest(f'Invalid status data: {e}') from e

    try:
        document = status.update_status(manual_items=manual_items,
                                        monitors=monitors,
                                        revision=data.get('revision'))
    except ValidationError as e:
        raise BadRequest(str(e)) from e
    except ConflictError as e:
        raise Conflict(str(e)) from e
    return {'ok': True, 'state': document.to_dict()}, HTTPStatus.OK, {}


def run_sweep() -> Response:
    """Probe all monitors, unless a sweep ran too recently."""
    result = uptime.run_sweep()
    body: Dict[str, Any] = {'ok': True}
    body.update(result.to_dict())
    return body, HTTPStatus.OK, {}
