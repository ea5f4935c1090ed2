"""Request controllers."""

from http import HTTPStatus

from ..services import store
from .util import Response


def service_status() -> Response:
    """Handle requests for the status of this service."""
    if not store.current_store().is_available():
        return {'ok': False, 'store': False, 'error': 'Store unavailable'}, \
            HTTPStatus.SERVICE_UNAVAILABLE, {}
    return {'ok': True, 'store': True}, HTTPStatus.OK, {}
