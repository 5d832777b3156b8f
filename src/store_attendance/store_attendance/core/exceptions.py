class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when the caller may not access the requested data."""


class NotFoundError(DomainError):
    """Raised when the requested employee or month does not exist."""


class FetchError(DomainError):
    """Raised when a month could not be loaded after retries."""


class SaveError(DomainError):
    """Raised when the bulk save of a month fails.

    In-memory edits are kept so the caller can retry.
    """


class SaveInProgressError(DomainError):
    """Raised when a save is requested while another one is in flight."""
