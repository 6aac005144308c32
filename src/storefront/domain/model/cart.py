"""Cart entries.

A user's cart is simply the set of CartItem rows carrying their user id;
there is no separate cart record. Each entry snapshots the product name,
price and image when it is first added and is not kept in sync with the
catalog afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CartItem:
    """One (user, product) line in a cart."""

    id: int | None
    user_id: int
    product_id: int
    quantity: Quantity
    product_name: str
    price: Money  # snapshot taken at add-time
    image_url: str
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @staticmethod
    def for_product(user_id: int, product: Product, quantity: Quantity) -> CartItem:
        """Start a new cart line from a catalog product."""
        if not product.is_active:
            raise EntityNotFoundError("Product not found or inactive")
        return CartItem(
            id=None,
            user_id=user_id,
            product_id=product.id,  # type: ignore[arg-type]
            quantity=quantity,
            product_name=product.name,
            price=product.price,
            image_url=product.image_url,
        )

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value
