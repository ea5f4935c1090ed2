"""Exceptions raised by the campus hub core."""


class HubException(RuntimeError):
    """Base for campus hub exceptions."""


class ValidationError(HubException, ValueError):
    """Input was missing or malformed."""


class AuthError(HubException):
    """The admin credential was missing or incorrect."""


class NotFoundError(HubException):
    """An operation referred to a record that does not exist."""


class ConflictError(HubException):
    """An operation conflicts with the current state of a record."""


class UpstreamFetchError(HubException):
    """An upstream resource could not be retrieved."""


class ConfigurationError(HubException):
    """A required parameter is invalid/missing from the application config."""
