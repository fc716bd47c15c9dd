"""Exceptions raised by Animeflix."""


class AnimeflixError(Exception):
    """Base class for all Animeflix errors."""


class Cancelled(AnimeflixError):
    """A request was aborted because a newer query superseded it.

    Never shown to the user.
    """


class TransportError(AnimeflixError):
    """The catalog API could not be reached or returned something unusable."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(AnimeflixError):
    """Rejected input at the store boundary."""
