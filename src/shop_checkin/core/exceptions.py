class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class StorageError(DomainError):
    """Raised when the backing store fails to read or write.

    Safe for the client to retry.
    """


class DuplicateCheckInError(StorageError):
    """Raised when the (employee, local day) unique key rejects an insert."""
