"""
The uptime monitor sweep.

A sweep probes every configured monitor once and records the results in the
status document. Sweeps are triggered from outside (an HTTP call or the
``campushub-sweep`` script run by a scheduler); a sweep requested less than
``UPTIME_MIN_INTERVAL`` seconds after the previous one does nothing.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Dict, Any

from dataclasses import dataclass
from flask import current_app

from .domain import MonitorResult
from .domain.util import get_tzaware_utc_now, format_timestamp
from .services import probe
from . import status

logger = logging.getLogger(__name__)

TOO_RECENT = 'Ran too recently'


@dataclass
class SweepResult:
    """Outcome of :func:`run_sweep`."""

    skipped: bool
    reason: Optional[str] = None
    checked_at: Optional[datetime] = None
    monitors_checked: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Generate the wire representation of the outcome."""
        data: Dict[str, Any] = {'skipped': self.skipped}
        if self.reason is not None:
            data['reason'] = self.reason
        if self.checked_at is not None:
            data['checkedAt'] = format_timestamp(self.checked_at)
        if self.monitors_checked is not None:
            data['monitorsChecked'] = self.monitors_checked
        return data


def run_sweep(now: Optional[datetime] = None) -> SweepResult:
    """
    Probe all monitors and persist the results.

    Each monitor is probed once, one after the other. A failed probe is
    recorded as ``ok=False`` and does not affect the others. Results are
    written in one go after the last probe: new results replace older ones
    for the same monitor, and results for monitors that are no longer
    configured are kept.

    Parameters
    ----------
    now : datetime or None
        Start time of the sweep. Defaults to the current time.

    Returns
    -------
    :class:`.SweepResult`

    """
    config = current_app.config
    min_interval = timedelta(seconds=config.get('UPTIME_MIN_INTERVAL', 60))
    timeout = config.get('UPTIME_PROBE_TIMEOUT', 8)
    if now is None:
        now = get_tzaware_utc_now()

    document = status.get_status()
    last_run = document.last_auto_run_at
    if last_run is not None and now - last_run < min_interval:
        logger.debug('Last sweep at %s; skipping', last_run)
        return SweepResult(skipped=True, reason=TOO_RECENT)

    logger.info('Starting sweep of %i monitors', len(document.monitors))
    results: Dict[str, MonitorResult] = {}
    for monitor in document.monitors:
        ok, http_status = probe.probe(monitor.target_url, timeout)
        results[monitor.monitor_id] = MonitorResult(
            monitor_id=monitor.monitor_id,
            ok=ok,
            checked_at=now,
            http_status=http_status
        )

    # Re-read so that admin edits made while probing are not overwritten.
    document = status.get_status()
    document.monitor_results.update(results)
    document.last_auto_run_at = now
    status.save_status(document)
    logger.info('Sweep complete; %i of %i monitors up',
                sum(1 for result in results.values() if result.ok),
                len(results))
    return SweepResult(skipped=False, checked_at=now,
                       monitors_checked=len(results))
