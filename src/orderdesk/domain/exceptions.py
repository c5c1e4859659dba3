"""Domain-level exceptions.

Business rule violations are subclasses of DomainException so the CLI
layer can catch them uniformly. Storage faults are kept separate as
StoreError: they are not the caller's fault and are never recovered
from inside the application layer.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A required field is missing or a value is out of range."""


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class StoreError(Exception):
    """The underlying store failed to read or write."""
