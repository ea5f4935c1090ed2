"""Reachability probes for monitored URLs."""

import logging
from typing import Tuple, Optional

import requests

logger = logging.getLogger(__name__)

ProbeResult = Tuple[bool, Optional[int]]


def is_success(status_code: int) -> bool:
    """Only 2xx responses count as up."""
    return 200 <= status_code < 300


def probe(url: str, timeout: float) -> ProbeResult:
    """
    Issue a single GET request to ``url``, following redirects.

    The body is not downloaded. No retries are attempted.

    Parameters
    ----------
    url : str
        Target of the probe.
    timeout : float
        Seconds to wait for the connection and for the response.

    Returns
    -------
    bool
        ``True`` if the target responded with a 2xx status.
    int or None
        The response status code, or ``None`` if the target never produced
        a response (timeout, connection failure, bad URL).

    """
    try:
        response = requests.get(url, timeout=timeout, allow_redirects=True,
                                stream=True)
    except requests.exceptions.RequestException as e:
        logger.warning('Probe of %s failed: %s', url, e)
        return False, None
    try:
        status_code = int(response.status_code)
    finally:
        response.close()
    if not is_success(status_code):
        logger.warning('Probe of %s returned %i', url, status_code)
    return is_success(status_code), status_code
