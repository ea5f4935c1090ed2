"""Controllers for shared course materials."""

import logging
from http import HTTPStatus
from typing import Dict, Any

from werkzeug.exceptions import BadRequest, NotFound, Conflict

from ..exceptions import ValidationError, NotFoundError, ConflictError
from .. import moderation
from .util import validate_request, Response

logger = logging.getLogger(__name__)


def list_public() -> Response:
    """Get approved submissions, without moderator-only fields."""
    submissions = [submission.to_dict(public=True)
                   for submission in moderation.list_public()]
    return {'ok': True, 'submissions': submissions}, HTTPStatus.OK, {}


def list_all() -> Response:
    """Get every submission. Admin only."""
    submissions = [submission.to_dict()
                   for submission in moderation.list_all()]
    return {'ok': True, 'submissions': submissions}, HTTPStatus.OK, {}


@validate_request('submission_create.json')
def create_submission(data: Dict[str, Any]) -> Response:
    """
    Create a new, pending submission.

    Parameters
    ----------
    data : dict
        Request body with ``title``, ``course``, ``category``, and
        ``fileUrl``.

    Returns
    -------
    dict
        Response data.
    int
        HTTP status code.
    dict
        Headers to add to the response.

    """
    logger.debug('Received request to create submission')
    try:
        submission = moderation.create_submission(
            title=data['title'],
            course=data['course'],
            category=data['category'],
            file_url=data['fileUrl']
        )
    except ValidationError as e:
        raise BadRequest(str(e)) from e
    return {'ok': True, 'submission': submission.to_dict()}, \
        HTTPStatus.CREATED, {}


@validate_request('submission_review.json')
def review_submission(data: Dict[str, Any]) -> Response:
    """Approve or reject a pending submission. Admin only."""
    try:
        submission = moderation.review_submission(data['id'], data['action'],
                                                  note=data.get('note'))
    except ValidationError as e:
        raise BadRequest(str(e)) from e
    except NotFoundError as e:
        raise NotFound(str(e)) from e
    except ConflictError as e:
        raise Conflict(str(e)) from e
    return {'ok': True, 'submission': submission.to_dict()}, HTTPStatus.OK, {}


@validate_request('submission_rate.json')
def rate_submission(data: Dict[str, Any]) -> Response:
    """Add a star rating to an approved submission."""
    try:
        submission = moderation.rate_submission(data['id'], data['rating'])
    except ValidationError as e:
        raise BadRequest(str(e)) from e
    except NotFoundError as e:
        raise NotFound(str(e)) from e
    return {'ok': True, 'averageRating': f'{submission.rating:.1f}',
            'ratingCount': submission.rating_count}, HTTPStatus.OK, {}
