class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDerivationInput(ValidationError):
    """Raised when due-date or risk derivation is fed nonsensical input.

    Examples: a negative cycle length, or an activity dated after ``now``.
    """


class NotFoundError(DomainError):
    """Raised when a referenced employee or activity does not exist."""


class DataUnavailableError(DomainError):
    """Raised when the underlying data store cannot be reached or queried.

    Callers must be able to tell "no employees" apart from "could not read
    employees", so this is never converted into an empty result.
    """


class MalformedRecordError(DataUnavailableError):
    """Raised when a row coming back from the data store fails validation."""
