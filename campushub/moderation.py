"""
Anonymous submission and moderation of shared course materials.

The lifecycle of a :class:`.Submission` is::

    pending --approve--> approved
    pending --reject---> rejected

Both outcomes are terminal: a second review is refused with
:class:`.ConflictError`. Only approved submissions are visible to the public,
and only they can be rated.

All submissions are stored as one list under a single key, most recent first.
"""

import logging
import secrets
from datetime import datetime
from typing import List, Optional, Any

from .domain import Submission, SubmissionStatus, Category, ReviewAction, \
    NOTE_MAX_LENGTH
from .domain.util import get_tzaware_utc_now
from .exceptions import ValidationError, NotFoundError, ConflictError
from .services import store

logger = logging.getLogger(__name__)

SUBMISSIONS_KEY = 'submissions'

MIN_RATING = 1
MAX_RATING = 5


def new_submission_id(now: Optional[datetime] = None) -> str:
    """Generate an identifier from random bits and the current time."""
    if now is None:
        now = get_tzaware_utc_now()
    return f'{secrets.token_hex(6)}{int(now.timestamp() * 1000):x}'


def load_submissions() -> List[Submission]:
    """Load all submissions, in stored order."""
    data = store.current_store().get_json(SUBMISSIONS_KEY, [])
    return [Submission.from_dict(datum) for datum in data]


def save_submissions(submissions: List[Submission]) -> None:
    """Persist the complete list of submissions."""
    store.current_store().set_json(
        SUBMISSIONS_KEY,
        [submission.to_dict() for submission in submissions]
    )


def create_submission(title: Any, course: Any, category: Any, file_url: Any,
                      now: Optional[datetime] = None) -> Submission:
    """
    Accept a new submission for moderation.

    Parameters
    ----------
    title : str
    course : str
    category : str
        One of the :class:`.Category` values.
    file_url : str
        Where the material can be downloaded.
    now : datetime or None
        Creation time. Defaults to the current time.

    Returns
    -------
    :class:`.Submission`
        The new, pending submission.

    Raises
    ------
    :class:`.ValidationError`
        Raised if a field is empty (after trimming whitespace) or the category
        is not recognized.

    """
    title = _required('title', title)
    course = _required('course', course)
    file_url = _required('fileUrl', file_url)
    try:
        _category = Category(_required('category', category))
    except ValueError as e:
        raise ValidationError(f'Unrecognized category: {category}') from e
    if now is None:
        now = get_tzaware_utc_now()

    submission = Submission(
        submission_id=new_submission_id(now),
        title=title,
        course=course,
        category=_category,
        file_url=file_url,
        created_at=now
    )
    save_submissions([submission] + load_submissions())
    logger.info('Created submission %s', submission.submission_id)
    return submission


def review_submission(submission_id: str, action: Any,
                      note: Optional[str] = None,
                      now: Optional[datetime] = None) -> Submission:
    """
    Approve or reject a pending submission.

    Parameters
    ----------
    submission_id : str
    action : str
        One of the :class:`.ReviewAction` values.
    note : str or None
        Optional note from the moderator. Silently truncated to
        :const:`.NOTE_MAX_LENGTH` characters.
    now : datetime or None
        Review time. Defaults to the current time.

    Returns
    -------
    :class:`.Submission`
        The reviewed submission.

    Raises
    ------
    :class:`.ValidationError`
        Raised if ``action`` is not recognized.
    :class:`.NotFoundError`
        Raised if there is no submission with ``submission_id``.
    :class:`.ConflictError`
        Raised if the submission was already reviewed.

    """
    try:
        _action = ReviewAction(action)
    except ValueError as e:
        raise ValidationError(f'Unrecognized action: {action}') from e
    if now is None:
        now = get_tzaware_utc_now()

    submissions = load_submissions()
    submission = _find(submissions, submission_id)
    if submission.is_reviewed:
        raise ConflictError(f'Submission {submission_id} was already'
                            f' {submission.status.value}')
    submission.status = _action.outcome
    submission.reviewed_at = now
    submission.reviewer_note = note[:NOTE_MAX_LENGTH] if note else None
    save_submissions(submissions)
    logger.info('Submission %s %s', submission_id, submission.status.value)
    return submission


def rate_submission(submission_id: str, rating: Any) -> Submission:
    """
    Add a 1-5 star rating to an approved submission.

    Raises
    ------
    :class:`.ValidationError`
        Raised if ``rating`` is not an integer from 1 to 5.
    :class:`.NotFoundError`
        Raised if there is no approved submission with ``submission_id``.

    """
    if isinstance(rating, bool) or not isinstance(rating, int) \
            or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f'Rating must be an integer from {MIN_RATING}'
                              f' to {MAX_RATING}')
    submissions = load_submissions()
    submission = _find(submissions, submission_id)
    if not submission.is_public:
        raise NotFoundError(f'No such submission: {submission_id}')
    submission.total_rating += rating
    submission.rating_count += 1
    save_submissions(submissions)
    return submission


def list_public() -> List[Submission]:
    """Get the approved submissions, in stored order."""
    return [submission for submission in load_submissions()
            if submission.status is SubmissionStatus.APPROVED]


def list_all() -> List[Submission]:
    """Get every submission regardless of status. For moderators only."""
    return load_submissions()


def _required(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'Required: {name}')
    return value.strip()


def _find(submissions: List[Submission], submission_id: str) -> Submission:
    try:
        return next(submission for submission in submissions
                    if submission.submission_id == submission_id)
    except StopIteration as e:
        raise NotFoundError(f'No such submission: {submission_id}') from e
