"""Core data structures for the campus hub."""

from .status import Severity, ManualStatusItem, Monitor, MonitorResult, \
    StatusDocument
from .submission import Submission, SubmissionStatus, Category, \
    ReviewAction, NOTE_MAX_LENGTH
from .calendar import CalendarEvent, CalendarCacheEntry
