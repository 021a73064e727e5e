"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each branch of the hierarchy maps to a distinct outcome for the caller:
not-found, validation, conflict, invalid transition, stock, side effect.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


# --- Validation ---------------------------------------------------------------


class ValidationError(DomainException):
    """Malformed input or a violated business rule."""


class InvariantViolation(ValidationError):
    """An aggregate could not be built or mutated without breaking a rule."""


class InvalidOrderError(InvariantViolation):
    """The Order aggregate rejected its items, user, or totals."""


class InvalidQuantityError(ValidationError):
    """A line quantity is not a positive integer."""


class StatusParseError(ValidationError):
    """A string does not name any order status."""


# --- Lookups ------------------------------------------------------------------


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UserNotFoundError(EntityNotFoundError):
    pass


class ProductNotFoundError(EntityNotFoundError):
    pass


class OrderNotFoundError(EntityNotFoundError):
    pass


class ItemNotFoundError(EntityNotFoundError):
    """The order has no line for the referenced product."""


# --- Business conflicts -------------------------------------------------------


class ConflictError(DomainException):
    """A uniqueness rule (email, SKU) would be broken."""


class InvalidTransitionError(DomainException):
    """The order status graph has no edge from ``source`` to ``target``."""

    def __init__(self, source: object, target: object, message: str | None = None) -> None:
        self.source = source
        self.target = target
        super().__init__(message or f"Cannot transition from {source} to {target}")


class InsufficientStockError(DomainException):

    def __init__(self, product_name: str, available: int, requested: int) -> None:
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for product {product_name}. "
            f"Available: {available}, Requested: {requested}"
        )


# --- Post-persistence side effects --------------------------------------------


class SideEffectError(DomainException):
    """Raised after the write succeeded; the persisted state is NOT rolled back."""

    def __init__(self, message: str, order_id: str | None = None) -> None:
        self.order_id = order_id
        super().__init__(message)


class EventPublishError(SideEffectError):
    pass


class NotificationError(SideEffectError):
    pass
