"""Data structures for shared course materials and their moderation."""

from typing import Optional, Dict, Any
from datetime import datetime
from enum import Enum

from dataclasses import dataclass, field

from .util import parse_timestamp, format_timestamp

NOTE_MAX_LENGTH = 500
"""Reviewer notes longer than this are truncated."""


class Category(Enum):
    """Supported kinds of course material."""

    NOTES = 'notes'
    EXAM = 'exam'
    STUDY_GUIDE = 'study-guide'
    OTHER = 'other'


class SubmissionStatus(Enum):
    """Moderation status of a :class:`.Submission`."""

    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'


class ReviewAction(Enum):
    """Decisions available to a moderator."""

    APPROVE = 'approve'
    REJECT = 'reject'

    @property
    def outcome(self) -> SubmissionStatus:
        """The status that a submission enters after this action."""
        if self is ReviewAction.APPROVE:
            return SubmissionStatus.APPROVED
        return SubmissionStatus.REJECTED


@dataclass
class Submission:
    """
    A user-contributed course resource.

    Starts out :attr:`.SubmissionStatus.PENDING`, and is moved to
    ``APPROVED`` or ``REJECTED`` by a single moderator review. Both outcomes
    are terminal. The submitter cannot edit the record after creating it.
    """

    submission_id: str
    title: str
    course: str
    category: Category
    file_url: str
    created_at: datetime
    status: SubmissionStatus = field(default=SubmissionStatus.PENDING)
    reviewed_at: Optional[datetime] = None
    reviewer_note: Optional[str] = None

    total_rating: int = 0
    rating_count: int = 0

    def __post_init__(self) -> None:
        """Make sure that enums and timestamps are typed."""
        self.category = Category(self.category)
        self.status = SubmissionStatus(self.status)
        self.created_at = parse_timestamp(self.created_at)
        self.reviewed_at = parse_timestamp(self.reviewed_at)

    @property
    def is_reviewed(self) -> bool:
        """Determine whether a moderator has already acted on this record."""
        return self.status is not SubmissionStatus.PENDING

    @property
    def is_public(self) -> bool:
        """Determine whether this record may be shown to anyone."""
        return self.status is SubmissionStatus.APPROVED

    @property
    def rating(self) -> float:
        """Average of all ratings received, or 0 if there are none."""
        if not self.rating_count:
            return 0.0
        return self.total_rating / self.rating_count

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Submission':
        """Load a submission from its stored representation."""
        return cls(
            submission_id=data['id'],
            title=data['title'],
            course=data['course'],
            category=data['category'],
            file_url=data['fileUrl'],
            created_at=data['createdAt'],
            status=data.get('status', SubmissionStatus.PENDING.value),
            reviewed_at=data.get('reviewedAt'),
            reviewer_note=data.get('reviewerNote'),
            total_rating=int(data.get('totalRating', 0)),
            rating_count=int(data.get('ratingCount', 0))
        )

    def to_dict(self, public: bool = False) -> Dict[str, Any]:
        """
        Generate the stored/wire representation of this submission.

        Parameters
        ----------
        public : bool
            If ``True``, moderator-only fields are left out.

        """
        data: Dict[str, Any] = {
            'id': self.submission_id,
            'title': self.title,
            'course': self.course,
            'category': self.category.value,
            'fileUrl': self.file_url,
            'status': self.status.value,
            'createdAt': format_timestamp(self.created_at),
            'rating': round(self.rating, 1),
            'ratingCount': self.rating_count,
            'totalRating': self.total_rating
        }
        if self.reviewed_at is not None:
            data['reviewedAt'] = format_timestamp(self.reviewed_at)
        if self.reviewer_note is not None and not public:
            data['reviewerNote'] = self.reviewer_note
        return data
