"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its items. Items and the total
are fixed when the order is created; afterwards only the status, the
payment status and the addresses may change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from storefront.domain.exceptions import InvalidTransitionError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PAYPAL = "paypal"
    STRIPE = "stripe"


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MIN_ADDRESS_LENGTH = 10
MUTABLE_FIELDS = frozenset(
    {"status", "payment_status", "shipping_address", "billing_address"}
)


@dataclass
class OrderItem:
    """Captures the price of a product at order-creation time.

    ``product_name`` and ``image_url`` are filled in from the catalog
    inside the order transaction, see ``take_snapshot``.
    """

    product_id: int
    quantity: Quantity
    price: Money  # locked at order-creation time
    product_name: str = ""
    image_url: str = ""
    id: int | None = None
    order_id: int | None = None

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value

    def take_snapshot(self, product: Product) -> None:
        self.product_name = product.name
        self.image_url = product.image_url


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules and freezes ``total_amount``. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: int | None
    user_id: int
    items: list[OrderItem]
    total_amount: Money
    shipping_address: str
    billing_address: str
    payment_method: PaymentMethod
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: int,
        items: list[OrderItem],
        shipping_address: str,
        billing_address: str,
        payment_method: str | PaymentMethod,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not isinstance(user_id, int) or user_id <= 0:
            raise ValidationError(f"Invalid user ID: {user_id!r}")

        if not items:
            raise ValidationError("Order must contain at least one item")

        for item in items:
            if item.price.is_zero:
                raise ValidationError(
                    f"Price for product {item.product_id} must be greater than zero"
                )

        return Order(
            id=None,
            user_id=user_id,
            items=list(items),
            total_amount=total_of(items),
            shipping_address=_check_address(shipping_address, "Shipping"),
            billing_address=_check_address(billing_address, "Billing"),
            payment_method=parse_payment_method(payment_method),
        )

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Transition PENDING -> CANCELLED on the customer's behalf.

        Stock taken by the order is not returned to the catalog.
        """
        if self.status != OrderStatus.PENDING:
            raise InvalidTransitionError(
                f"Only pending orders can be cancelled; order #{self.id} "
                f"is {self.status.value}"
            )
        self.status = OrderStatus.CANCELLED
        self.updated_at = datetime.now(timezone.utc)

    # --- Queries --------------------------------------------------------------

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def total_of(items: list[OrderItem]) -> Money:
    result = Money.zero()
    for item in items:
        result = result + item.line_total
    return result


def parse_payment_method(value: str | PaymentMethod) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(value)
    except ValueError:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(
            f"Invalid payment method {value!r} (expected one of: {allowed})"
        ) from None


def validate_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """Normalize a sparse order update, dropping fields that are None.

    Status values are coerced to their enums; nothing here checks the
    transition table, admin updates are not bound by it.
    """
    unknown = set(changes) - MUTABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown order fields: {', '.join(sorted(unknown))}")

    result: dict[str, Any] = {}
    for key, value in changes.items():
        if value is None:
            continue
        if key == "status":
            result[key] = _coerce(OrderStatus, value, "order status")
        elif key == "payment_status":
            result[key] = _coerce(PaymentStatus, value, "payment status")
        else:
            label = "Shipping" if key == "shipping_address" else "Billing"
            result[key] = _check_address(value, label)
    return result


def _coerce(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {label}: {value!r}") from None


def _check_address(value: str, label: str) -> str:
    value = (value or "").strip()
    if len(value) < MIN_ADDRESS_LENGTH:
        raise ValidationError(
            f"{label} address must be at least {MIN_ADDRESS_LENGTH} characters"
        )
    return value
