"""Data structures for the calendar view."""

from typing import Optional, List, Dict, Any
from datetime import datetime

from dataclasses import dataclass, field

from .util import parse_timestamp, format_timestamp


@dataclass
class CalendarEvent:
    """A single event taken from the upstream feed."""

    title: str
    start: datetime
    end: Optional[datetime] = None
    location: Optional[str] = None

    def __post_init__(self) -> None:
        """Make sure that timestamps are typed."""
        self.start = parse_timestamp(self.start)
        self.end = parse_timestamp(self.end)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CalendarEvent':
        """Load an event from its stored representation."""
        return cls(title=data['title'], start=data['start'],
                   end=data.get('end'), location=data.get('location'))

    def to_dict(self) -> Dict[str, Any]:
        """Generate the stored/wire representation of this event."""
        data: Dict[str, Any] = {'title': self.title,
                                'start': format_timestamp(self.start)}
        if self.end is not None:
            data['end'] = format_timestamp(self.end)
        if self.location is not None:
            data['location'] = self.location
        return data


@dataclass
class CalendarCacheEntry:
    """Events from the most recent feed fetch; replaced on every refresh."""

    fetched_at: datetime
    events: List[CalendarEvent] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Make sure that the timestamp is typed."""
        self.fetched_at = parse_timestamp(self.fetched_at)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CalendarCacheEntry':
        """Load the cache entry from its stored representation."""
        return cls(fetched_at=data['fetchedAt'],
                   events=[CalendarEvent.from_dict(event)
                           for event in data.get('events', [])])

    def to_dict(self) -> Dict[str, Any]:
        """Generate the stored representation of the cache entry."""
        return {'fetchedAt': format_timestamp(self.fetched_at),
                'events': [event.to_dict() for event in self.events]}
