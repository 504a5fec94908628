"""Exceptions raised by the FSRS engine and its persistence layer."""


class FSRSError(Exception):
    """Base exception for the FSRS package."""
    pass


class InvalidArgumentError(FSRSError, ValueError):
    """Raised when an input violates a precondition (caller bug, never clamped)."""
    pass


class InvalidRatingError(InvalidArgumentError):
    """Raised when the provided rating is not valid (must be 1-4)."""
    pass


class CardNotFoundError(FSRSError, LookupError):
    """Raised when a card id has no stored record."""
    pass


class PersistenceError(FSRSError, RuntimeError):
    """Raised when a card update and its review log could not be committed together."""
    pass
