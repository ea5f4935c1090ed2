"""Tests for :mod:`campushub.controllers`."""

from http import HTTPStatus
from unittest import TestCase, mock

from werkzeug.exceptions import BadRequest, NotFound, Conflict, BadGateway, \
    InternalServerError

from ...domain import Submission, CalendarEvent
from ...exceptions import ValidationError, NotFoundError, ConflictError, \
    UpstreamFetchError, ConfigurationError
from ...uptime import SweepResult
from ...tests.util import utc
from ... import controllers
from .. import status, submissions, calendar

NOW = utc(2026, 10, 19, 16, 0, 0)


def approved_submission():
    """Generate an approved submission with a private note."""
    return Submission('abc', 'Midterm Review', 'CS 101', 'exam',
                      'http://x/y.pdf', NOW, status='approved',
                      reviewed_at=NOW, reviewer_note='Looks good',
                      total_rating=7, rating_count=2)


class TestServiceStatus(TestCase):
    """Tests for :func:`.controllers.service_status`."""

    @mock.patch(f'{controllers.__name__}.store')
    def test_store_down(self, mock_store):
        """The service is unavailable if the store is."""
        mock_store.current_store.return_value.is_available.return_value = False
        data, code, _ = controllers.service_status()
        self.assertEqual(code, HTTPStatus.SERVICE_UNAVAILABLE)
        self.assertFalse(data['ok'])

    @mock.patch(f'{controllers.__name__}.store')
    def test_store_up(self, mock_store):
        """The service is available if the store is."""
        mock_store.current_store.return_value.is_available.return_value = True
        data, code, _ = controllers.service_status()
        self.assertEqual(code, HTTPStatus.OK)
        self.assertEqual(data, {'ok': True, 'store': True})


class TestUpdateStatus(TestCase):
    """Tests for :func:`.controllers.status.update_status`."""

    @mock.patch(f'{status.__name__}.status')
    def test_unknown_field(self, mock_status):
        """Fields that are not in the schema are refused."""
        with self.assertRaises(BadRequest):
            status.update_status({'manualItems': [], 'lastAutoRunAt': 'x'})
        mock_status.update_status.assert_not_called()

    @mock.patch(f'{status.__name__}.status')
    def test_bad_severity(self, mock_status):
        """Severity must be one of the known levels."""
        with self.assertRaises(BadRequest):
            status.update_status({'manualItems': [{
                'id': 'a', 'title': 'A', 'message': '', 'severity': 'fire'
            }]})
        mock_status.update_status.assert_not_called()

    @mock.patch(f'{status.__name__}.status')
    def test_bad_timestamp(self, mock_status):
        """An unreadable ``updatedAt`` is a bad request."""
        with self.assertRaises(BadRequest):
            status.update_status({'manualItems': [{
                'id': 'a', 'title': 'A', 'message': '', 'severity': 'ok',
                'updatedAt': 'whenever'
            }]})

    @mock.patch(f'{status.__name__}.status')
    def test_conflict(self, mock_status):
        """An outdated revision is a conflict."""
        mock_status.update_status.side_effect = ConflictError('outdated')
        with self.assertRaises(Conflict):
            status.update_status({'monitors': [], 'revision': 1})

    @mock.patch(f'{status.__name__}.status')
    def test_duplicates(self, mock_status):
        """Repeated ids are a bad request."""
        mock_status.update_status.side_effect = ValidationError('dupe')
        with self.assertRaises(BadRequest):
            status.update_status({'monitors': []})

    @mock.patch(f'{status.__name__}.status')
    def test_only_monitors(self, mock_status):
        """Fields that are not sent are not replaced."""
        mock_status.update_status.return_value.to_dict.return_value = {}
        _, code, _ = status.update_status({'monitors': [{
            'id': 'lib', 'name': 'Library', 'targetUrl': 'https://lib.test'
        }]})
        self.assertEqual(code, HTTPStatus.OK)
        kwargs = mock_status.update_status.call_args[1]
        self.assertIsNone(kwargs['manual_items'])
        self.assertEqual(kwargs['monitors'][0].target_url, 'https://lib.test')
        self.assertIsNone(kwargs['revision'])


class TestRunSweep(TestCase):
    """Tests for :func:`.controllers.status.run_sweep`."""

    @mock.patch(f'{status.__name__}.uptime')
    def test_sweep(self, mock_uptime):
        """The outcome of the sweep is returned."""
        mock_uptime.run_sweep.return_value = \
            SweepResult(skipped=False, checked_at=NOW, monitors_checked=2)
        data, code, _ = status.run_sweep()
        self.assertEqual(code, HTTPStatus.OK)
        self.assertEqual(data, {'ok': True, 'skipped': False,
                                'checkedAt': '2026-10-19T16:00:00+00:00',
                                'monitorsChecked': 2})


class TestSubmissions(TestCase):
    """Tests for :mod:`.controllers.submissions`."""

    @mock.patch(f'{submissions.__name__}.moderation')
    def test_public_list(self, mock_moderation):
        """Moderator notes are not shown to the public."""
        mock_moderation.list_public.return_value = [approved_submission()]
        data, _, _ = submissions.list_public()
        self.assertNotIn('reviewerNote', data['submissions'][0])

    @mock.patch(f'{submissions.__name__}.moderation')
    def test_admin_list(self, mock_moderation):
        """Moderators see notes."""
        mock_moderation.list_all.return_value = [approved_submission()]
        data, _, _ = submissions.list_all()
        self.assertEqual(data['submissions'][0]['reviewerNote'], 'Looks good')

    @mock.patch(f'{submissions.__name__}.moderation')
    def test_create(self, mock_moderation):
        """A created submission gets 201."""
        mock_moderation.create_submission.return_value = approved_submission()
        _, code, _ = submissions.create_submission({
            'title': 'Midterm Review', 'course': 'CS 101',
            'category': 'exam', 'fileUrl': 'http://x/y.pdf'
        })
        self.assertEqual(code, HTTPStatus.CREATED)

    @mock.patch(f'{submissions.__name__}.moderation')
    def test_create_missing_field(self, mock_moderation):
        """All fields are required."""
        with self.assertRaises(BadRequest):
            submissions.create_submission({'title': 'T', 'course': 'C',
                                           'category': 'exam'})
        mock_moderation.create_submission.assert_not_called()

    @mock.patch(f'{submissions.__name__}.moderation')
    def test_create_blank_field(self, mock_moderation):
        """Blank fields are a bad request."""
        mock_moderation.create_submission.side_effect = \
            ValidationError('Required: title')
        with self.assertRaises(BadRequest):
            submissions.create_submission({
                'title': ' ', 'course': 'C', 'category': 'exam',
                'fileUrl': 'http://x'
            })

    @mock.patch(f'{submissions.__name__}.moderation')
    def test_review_errors(self, mock_moderation):
        """Domain errors are translated to HTTP errors."""
        body = {'id': 'abc', 'action': 'approve'}
        for error, expected in ((NotFoundError('x'), NotFound),
                                (ConflictError('x'), Conflict),
                                (ValidationError('x'), BadRequest)):
            mock_moderation.review_submission.side_effect = error
            with self.assertRaises(expected):
                submissions.review_submission(body)

    @mock.patch(f'{submissions.__name__}.moderation')
    def test_review_bad_action(self, mock_moderation):
        """Only approve and reject are valid actions."""
        with self.assertRaises(BadRequest):
            submissions.review_submission({'id': 'abc', 'action': 'delete'})

    @mock.patch(f'{submissions.__name__}.moderation')
    def test_rate(self, mock_moderation):
        """The new average is formatted with one decimal."""
        mock_moderation.rate_submission.return_value = approved_submission()
        data, _, _ = submissions.rate_submission({'id': 'abc', 'rating': 4})
        self.assertEqual(data, {'ok': True, 'averageRating': '3.5',
                                'ratingCount': 2})

    @mock.patch(f'{submissions.__name__}.moderation')
    def test_rate_out_of_range(self, mock_moderation):
        """Ratings outside 1-5 are refused."""
        with self.assertRaises(BadRequest):
            submissions.rate_submission({'id': 'abc', 'rating': 6})
        mock_moderation.rate_submission.assert_not_called()


class TestCalendar(TestCase):
    """Tests for :func:`.controllers.calendar.get_events`."""

    @mock.patch(f'{calendar.__name__}.calendar_cache')
    def test_events(self, mock_cache):
        """Events are returned with their source."""
        mock_cache.get_events.return_value = \
            ('cache', [CalendarEvent('Open House', NOW)])
        data, code, _ = calendar.get_events()
        self.assertEqual(code, HTTPStatus.OK)
        self.assertEqual(data['source'], 'cache')
        self.assertEqual(data['events'][0]['title'], 'Open House')

    @mock.patch(f'{calendar.__name__}.calendar_cache')
    def test_upstream_failure(self, mock_cache):
        """Feed failures are a bad gateway."""
        mock_cache.get_events.side_effect = UpstreamFetchError('503')
        with self.assertRaises(BadGateway):
            calendar.get_events()

    @mock.patch(f'{calendar.__name__}.calendar_cache')
    def test_not_configured(self, mock_cache):
        """A missing feed URL is a server error."""
        mock_cache.get_events.side_effect = \
            ConfigurationError('Missing ICAL_URL')
        with self.assertRaises(InternalServerError):
            calendar.get_events()
