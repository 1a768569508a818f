"""Exception hierarchy for WikiSearch."""

from enum import Enum


class FailureReason(Enum):
    """Why a posting store could not be reached."""
    CONFIG_MISSING = 'config missing'
    MALFORMED_URI = 'malformed URI'
    AUTH_REJECTED = 'auth rejected'
    CONNECTION_FAILED = 'connection failed'
    UNSUPPORTED_BACKEND = 'unsupported backend'


class WikiSearchError(Exception):
    """Base class for all WikiSearch errors."""


class StoreError(WikiSearchError):
    """Raised by posting store collaborators."""


class StoreUnavailableError(StoreError):
    """
    The posting store could not be reached.
    
    Kept distinct from an empty lookup so that a failed store is never
    mistaken for a query with zero matches.
    """
    
    def __init__(self, reason: FailureReason, message: str = ''):
        self.reason = reason
        self.message = message or reason.value
        super().__init__(f"{reason.value}: {self.message}")


class QueryParseError(WikiSearchError, ValueError):
    """Raised when a boolean query string cannot be parsed."""
