"""Errors raised by the storefront's domain and use cases.

The CLI catches DomainException and shows the message; anything else is
a bug and is allowed to propagate.
"""


class DomainException(Exception):
    """Base class for all storefront errors."""


class ValidationError(DomainException):
    """A cart, catalog or form rule was violated."""


class EntityNotFoundError(DomainException):
    """A product, category or cart line does not exist."""


class AuthenticationError(DomainException):
    """Missing, invalid or expired admin credentials."""
