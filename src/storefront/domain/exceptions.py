"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input was malformed or a business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class EmptyCartError(DomainException):
    """Checkout was attempted on a cart with no items."""


class InvalidTransitionError(DomainException):
    """An order status change is not permitted from its current status."""


class ForbiddenError(DomainException):
    """The caller may not act on the requested resource."""


class InsufficientStockError(DomainException):
    """Not enough stock is left to cover an order line."""


class TransactionFailureError(DomainException):
    """The store failed while a unit of work was in progress.

    The transaction has been rolled back by the time this is raised.
    """
