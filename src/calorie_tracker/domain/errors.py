"""Domain errors raised by application services."""


class TrackerError(Exception):
    """Base class for expected, client-facing failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(TrackerError):
    """Record is absent or owned by another user."""


class FoodNotFoundError(NotFoundError):
    """Referenced food does not exist or is not visible to the user."""

    def __init__(self, message: str = "Food not found") -> None:
        super().__init__(message)


class InvalidInputError(TrackerError):
    """Caller-supplied values are outside accepted ranges."""


class AuthenticationError(TrackerError):
    """Missing, invalid or expired credentials."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class UpstreamUnavailableError(TrackerError):
    """The language-model API is unreachable or returned nothing usable."""
