"""Domain errors raised by the services and mapped to HTTP responses in main."""


class LibraryError(Exception):
    """Base class for every error the services surface to callers."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFound(LibraryError):
    """A user, book or reservation does not exist."""


class Unavailable(LibraryError):
    """The requested book has no copies left to reserve."""


class InvalidState(LibraryError):
    """The entity is not in a state that allows the operation."""


class Conflict(LibraryError):
    """A unique key (email, external id) is already taken."""
