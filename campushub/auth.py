"""
Shared-secret authorization for admin endpoints.

There are no user accounts. Admin requests carry the configured
``ADMIN_TOKEN`` in the ``X-Admin-Token`` header.
"""

import hmac
from functools import wraps
from typing import Optional, Callable, Any

from flask import request, current_app
from werkzeug.exceptions import Unauthorized

from .exceptions import AuthError

ADMIN_HEADER = 'X-Admin-Token'


def check_admin_token(token: Optional[str], expected: Optional[str]) -> None:
    """
    Verify a presented admin token against the configured one.

    An empty configured token matches nothing, not even an empty token.

    Raises
    ------
    :class:`.AuthError`
        Raised if the token is missing or does not match.

    """
    if not expected:
        raise AuthError('Admin access is not configured')
    if not token:
        raise AuthError('Missing admin token')
    if not hmac.compare_digest(token.encode('utf-8'),
                               expected.encode('utf-8')):
        raise AuthError('Invalid admin token')


def admin_required(func: Callable) -> Callable:
    """Decorator that rejects requests without a valid admin token."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        """Check the admin token before executing the route."""
        try:
            check_admin_token(request.headers.get(ADMIN_HEADER),
                              current_app.config.get('ADMIN_TOKEN'))
        except AuthError as e:
            raise Unauthorized('Unauthorized') from e
        return func(*args, **kwargs)
    return wrapper
