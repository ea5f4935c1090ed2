"""Controllers for the calendar view."""

from http import HTTPStatus

from werkzeug.exceptions import BadGateway, InternalServerError

from ..exceptions import ConfigurationError, UpstreamFetchError
from .. import calendar_cache
from .util import Response


def get_events() -> Response:
    """Get the upcoming events, from the cache if it is fresh."""
    try:
        source, events = calendar_cache.get_events()
    except ConfigurationError as e:
        raise InternalServerError(str(e)) from e
    except UpstreamFetchError as e:
        raise BadGateway(str(e)) from e
    return {'ok': True, 'source': source,
            'events': [event.to_dict() for event in events]}, \
        HTTPStatus.OK, {}
