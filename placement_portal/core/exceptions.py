"""
Domain errors.

Every business-rule rejection raised by the domain or the service layer
is a PortalError. The message is meant to be shown to the actor as-is;
status_code is what the HTTP layer answers with.
"""


class PortalError(Exception):
    """Base class for all placement portal errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    """Malformed or missing required input."""

    status_code = 400


class NotFoundError(PortalError):
    """No entity with the requested id."""

    status_code = 404


class AuthorizationError(PortalError):
    """Actor does not own the resource it is trying to touch."""

    status_code = 403


class InvalidStateError(PortalError):
    """Operation is not legal from the entity's current state."""

    status_code = 409


class CapacityExceededError(InvalidStateError):
    """Internship has no remaining slots."""


class NotEligibleError(PortalError):
    """Student year/level mismatch, cap reached, or placement already held."""

    status_code = 422
