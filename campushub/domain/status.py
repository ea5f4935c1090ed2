"""Data structures for the status board."""

from typing import Optional, Dict, List, Any
from datetime import datetime
from enum import Enum

from dataclasses import dataclass, field

from .util import get_tzaware_utc_now, parse_timestamp, format_timestamp


class Severity(Enum):
    """Display severity of a manual status card."""

    OK = 'ok'
    INFO = 'info'
    WARN = 'warn'
    DOWN = 'down'


@dataclass
class ManualStatusItem:
    """A status card written by an admin, independent of monitoring."""

    item_id: str
    title: str
    message: str
    severity: Severity = field(default=Severity.INFO)
    updated_at: datetime = field(default_factory=get_tzaware_utc_now)

    def __post_init__(self) -> None:
        """Make sure that enums and timestamps are typed."""
        self.severity = Severity(self.severity)
        self.updated_at = parse_timestamp(self.updated_at)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ManualStatusItem':
        """Load a status card from its wire representation."""
        return cls(item_id=data['id'], title=data['title'],
                   message=data['message'], severity=data['severity'],
                   updated_at=data.get('updatedAt') or get_tzaware_utc_now())

    def to_dict(self) -> Dict[str, Any]:
        """Generate the wire representation of this status card."""
        return {'id': self.item_id, 'title': self.title,
                'message': self.message, 'severity': self.severity.value,
                'updatedAt': format_timestamp(self.updated_at)}


@dataclass
class Monitor:
    """An admin-configured URL that is probed for reachability."""

    monitor_id: str
    name: str
    target_url: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Monitor':
        """Load a monitor from its wire representation."""
        return cls(monitor_id=data['id'], name=data['name'],
                   target_url=data['targetUrl'])

    def to_dict(self) -> Dict[str, Any]:
        """Generate the wire representation of this monitor."""
        return {'id': self.monitor_id, 'name': self.name,
                'targetUrl': self.target_url}


@dataclass
class MonitorResult:
    """The outcome of the most recent probe of a :class:`.Monitor`."""

    monitor_id: str
    ok: bool
    checked_at: datetime
    http_status: Optional[int] = None
    """Only set if the target actually produced a response."""

    def __post_init__(self) -> None:
        """Make sure that the timestamp is typed."""
        self.checked_at = parse_timestamp(self.checked_at)

    @classmethod
    def from_dict(cls, monitor_id: str,
                  data: Dict[str, Any]) -> 'MonitorResult':
        """Load a result from its wire representation."""
        return cls(monitor_id=data.get('monitorId', monitor_id),
                   ok=bool(data['ok']), checked_at=data['checkedAt'],
                   http_status=data.get('httpStatus'))

    def to_dict(self) -> Dict[str, Any]:
        """Generate the wire representation of this result."""
        data: Dict[str, Any] = {'monitorId': self.monitor_id, 'ok': self.ok,
                                'checkedAt': format_timestamp(self.checked_at)}
        if self.http_status is not None:
            data['httpStatus'] = self.http_status
        return data


@dataclass
class StatusDocument:
    """
    The single status document for the portal.

    Admin edits replace :attr:`manual_items` and/or :attr:`monitors`
    wholesale; the monitor sweep owns :attr:`monitor_results` and
    :attr:`last_auto_run_at`. Results for monitors that have since been
    removed are kept.
    """

    manual_items: List[ManualStatusItem] = field(default_factory=list)
    monitors: List[Monitor] = field(default_factory=list)
    monitor_results: Dict[str, MonitorResult] = field(default_factory=dict)
    last_auto_run_at: Optional[datetime] = None
    revision: int = 0
    """Incremented on every admin edit; see :func:`.status.update_status`."""

    def __post_init__(self) -> None:
        """Make sure that the timestamp is typed."""
        self.last_auto_run_at = parse_timestamp(self.last_auto_run_at)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StatusDocument':
        """Load the status document from its stored representation."""
        return cls(
            manual_items=[ManualStatusItem.from_dict(item)
                          for item in data.get('manualItems', [])],
            monitors=[Monitor.from_dict(monitor)
                      for monitor in data.get('monitors', [])],
            monitor_results={
                monitor_id: MonitorResult.from_dict(monitor_id, result)
                for monitor_id, result
                in data.get('monitorResults', {}).items()
            },
            last_auto_run_at=data.get('lastAutoRunAt'),
            revision=int(data.get('revision', 0))
        )

    def to_dict(self) -> Dict[str, Any]:
        """Generate the stored/wire representation of the document."""
        data: Dict[str, Any] = {
            'manualItems': [item.to_dict() for item in self.manual_items],
            'monitors': [monitor.to_dict() for monitor in self.monitors],
            'monitorResults': {
                monitor_id: result.to_dict()
                for monitor_id, result in self.monitor_results.items()
            },
            'revision': self.revision
        }
        if self.last_auto_run_at is not None:
            data['lastAutoRunAt'] = format_timestamp(self.last_auto_run_at)
        return data
