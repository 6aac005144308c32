"""Product aggregate.

Products live independently of carts and orders. They have their own
lifecycle: prices change, stock is replenished, products are retired
from the catalog by clearing ``is_active``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

NAME_LENGTH = (2, 100)
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_LENGTH = (2, 50)

UPDATABLE_FIELDS = frozenset(
    {"name", "description", "price", "category", "image_url", "stock", "is_active"}
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Carts and orders copy ``name``, ``price`` and ``image_url`` when they
    reference a product, so editing a product never rewrites history.
    """

    id: int | None
    name: str
    description: str
    price: Money
    category: str
    image_url: str
    stock: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        description: str,
        price: Money,
        category: str,
        image_url: str,
        stock: int,
    ) -> Product:
        return Product(
            id=None,
            name=_check_name(name),
            description=_check_description(description),
            price=_check_price(price),
            category=_check_category(category),
            image_url=_check_image_url(image_url),
            stock=_check_stock(stock),
        )

    # --- Mutations ------------------------------------------------------------

    def apply_changes(self, changes: dict[str, Any]) -> None:
        """Apply a sparse set of field changes, validating each one.

        Fields missing from ``changes`` (or given as None) are left as-is.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown product fields: {', '.join(sorted(unknown))}")

        checks = {
            "name": _check_name,
            "description": _check_description,
            "price": _check_price,
            "category": _check_category,
            "image_url": _check_image_url,
            "stock": _check_stock,
            "is_active": bool,
        }
        for key, value in changes.items():
            if value is None:
                continue
            setattr(self, key, checks[key](value))
        self.updated_at = _utcnow()


# ---------------------------------------------------------------------------
# Field validation
# ---------------------------------------------------------------------------


def _check_name(value: str) -> str:
    value = (value or "").strip()
    low, high = NAME_LENGTH
    if not low <= len(value) <= high:
        raise ValidationError(f"Product name must be {low}-{high} characters")
    return value


def _check_description(value: str) -> str:
    value = (value or "").strip()
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Product description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
        )
    return value


def _check_price(value: Money) -> Money:
    if not isinstance(value, Money):
        value = Money.of(value)
    if value.amount <= 0:
        raise ValidationError("Product price must be greater than zero")
    return value


def _check_category(value: str) -> str:
    value = (value or "").strip()
    low, high = CATEGORY_LENGTH
    if not low <= len(value) <= high:
        raise ValidationError(f"Product category must be {low}-{high} characters")
    return value


def _check_image_url(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError("Product image URL is required")
    return value


def _check_stock(value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError("Product stock must be an integer")
    if value < 0:
        raise ValidationError("Product stock cannot be negative")
    return value
