class AvailabilityError(Exception):
    """Base class for errors raised by the availability services."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(AvailabilityError):
    """Malformed input, rejected before any store call. Never retried."""


class InvalidStateError(AvailabilityError):
    """The operation does not apply to the row's current state."""


class NotFoundError(InvalidStateError):
    """The addressed row does not exist."""


class StoreUnavailableError(AvailabilityError):
    """The backing store could not be reached."""
