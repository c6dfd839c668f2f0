"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class FetchError(DomainException):
    """Loading the order header, its line items or a product failed."""


class SaveError(DomainException):
    """The persistence call rejected the line-item batch.

    ``str(exc)`` is the human-readable message shown to the user.
    """
