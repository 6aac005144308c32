"""Application service: Update Cart Item use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import CartItemDTO, cart_item_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import check_id
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateCartItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int, product_id: int, quantity: int) -> CartItemDTO | None:
        """Overwrite the quantity of a cart entry.

        A quantity of zero or less removes the entry instead; removing an
        entry that does not exist is not an error. Returns None whenever
        no entry is left (removed, or never existed).
        """
        check_id(user_id, "user ID")
        check_id(product_id, "product ID")
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise ValidationError(f"Invalid quantity: {quantity!r}")

        with self._uow:
            if quantity <= 0:
                removed = self._uow.carts.remove(user_id, product_id)
                logger.info(
                    "Cart item removed", user_id=user_id, product_id=product_id, removed=removed
                )
                return None
            item = self._uow.carts.set_quantity(user_id, product_id, quantity)

        return cart_item_to_dto(item) if item is not None else None
