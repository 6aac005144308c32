"""Application service: Add To Cart use case.

Adding a product that is already in the cart merges into the existing
entry (quantity is incremented in one UPDATE). Only a first add reads
the catalog, which is when the name/price/image snapshot is taken.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartItemDTO, cart_item_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import CartItem
from storefront.domain.model.value_objects import Quantity, check_id
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int, product_id: int, quantity: int) -> CartItemDTO:
        check_id(user_id, "user ID")
        check_id(product_id, "product ID")
        qty = Quantity(quantity)

        merged = False
        with self._uow:
            item = None
            if self._uow.carts.get(user_id, product_id) is not None:
                item = self._uow.carts.increment_quantity(user_id, product_id, qty.value)
                merged = item is not None

            # Either a first add, or the entry vanished between the two statements
            if item is None:
                product = self._uow.products.get_by_id(product_id)
                if product is None:
                    raise EntityNotFoundError("Product not found or inactive")
                item = self._uow.carts.add(CartItem.for_product(user_id, product, qty))

        logger.info(
            "Cart updated",
            user_id=user_id,
            product_id=product_id,
            added=qty.value,
            quantity=item.quantity.value,
            merged=merged,
        )
        return cart_item_to_dto(item)
