"""Provides the JSON API."""

from functools import wraps
from typing import Any, Callable, Dict

from flask import Blueprint, Response, jsonify, request
from werkzeug.exceptions import BadRequest

from .auth import admin_required
from . import controllers
from .controllers import status, submissions, calendar

blueprint = Blueprint('campushub', __name__, url_prefix='')


def json_response(func: Callable) -> Callable:
    """Generate a wrapper for routes that JSONifies the response body."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Response:
        r_body, r_status, r_headers = func(*args, **kwargs)
        response: Response = jsonify(r_body)
        response.status_code = r_status
        response.headers.extend(r_headers)
        return response
    return wrapper


def get_body() -> Dict[str, Any]:
    """Get the JSON request body, which must be an object."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest('Invalid JSON body.')
    return data


@blueprint.route('/health', methods=['GET', 'HEAD'])
@json_response
def service_status() -> Any:
    """Status check endpoint."""
    return controllers.service_status()


@blueprint.route('/status', methods=['GET'])
@json_response
def get_status() -> Any:
    """Get the status board."""
    return status.get_status()


@blueprint.route('/status', methods=['POST'])
@json_response
@admin_required
def update_status() -> Any:
    """Replace manual status cards and/or monitors."""
    return status.update_status(get_body())


# Called by a scheduler; any method is accepted.
@blueprint.route('/uptime-check', methods=['GET', 'POST', 'PUT', 'PATCH',
                                          'DELETE'])
@json_response
def run_sweep() -> Any:
    """Run a monitor sweep."""
    return status.run_sweep()


@blueprint.route('/submissions', methods=['GET'])
@json_response
def list_public_submissions() -> Any:
    """List approved submissions."""
    return submissions.list_public()


@blueprint.route('/submissions', methods=['POST'])
@json_response
def create_submission() -> Any:
    """Accept a new submission."""
    return submissions.create_submission(get_body())


@blueprint.route('/submissions/all', methods=['GET'])
@json_response
@admin_required
def list_all_submissions() -> Any:
    """List every submission, for moderators."""
    return submissions.list_all()


@blueprint.route('/submissions/review', methods=['POST'])
@json_response
@admin_required
def review_submission() -> Any:
    """Approve or reject a submission."""
    return submissions.review_submission(get_body())


@blueprint.route('/submissions/rate', methods=['POST'])
@json_response
def rate_submission() -> Any:
    """Rate an approved submission."""
    return submissions.rate_submission(get_body())


@blueprint.route('/calendar', methods=['GET'])
@json_response
def get_calendar() -> Any:
    """Get upcoming campus events."""
    return calendar.get_events()
