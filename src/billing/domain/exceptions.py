"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so outer layers (CLI, HTTP controllers) can catch them uniformly and map
each kind to a user-facing status.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is malformed or a business rule was violated."""


class DuplicateError(DomainException):
    """A unique key (email, invoice number) is already taken."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class AuthenticationError(DomainException):
    """Credentials or token were rejected."""


class BackendUnavailableError(DomainException):
    """No storage backend could be opened for an aggregate."""
