"""
Domain exceptions raised by the service layer.

Services never build HTTP responses themselves.  They raise one of the
exceptions below and the handlers registered in ``main.py`` turn it
into the standard ``{success: false, error, details}`` envelope using
the ``status_code`` attribute of the exception class.
"""

from typing import List, Optional, Union


class RegistrationError(Exception):
    """Base class for errors reported to API clients."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Union[str, List[str]]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationFailed(RegistrationError):
    """Client input violates a stated rule.  Raised before any write."""

    status_code = 400


class DuplicateKey(RegistrationError):
    """A uniqueness constraint rejected the write."""

    status_code = 409


class DuplicateRegistration(DuplicateKey):
    """The (event name, leader email) pair is already registered."""


class DuplicateParticipantEmail(DuplicateKey):
    """Two participants of one registration share an email address."""


class DuplicateEvent(DuplicateKey):
    """An event with the same name or slug already exists."""


class NotFound(RegistrationError):
    status_code = 404


class AuthenticationFailed(RegistrationError):
    status_code = 401


class NotConfigured(RegistrationError):
    """A required server-side setting is missing."""

    status_code = 500


class StoreUnavailable(RegistrationError):
    """The database could not be reached or failed unexpectedly."""

    status_code = 500
