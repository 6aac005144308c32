"""Application service: Checkout (Create Order From Cart) use case.

Composes the cart and the Create Order use case. The cart is read and
cleared in units of work of its own; only the order placement itself is
atomic. If clearing fails after the order committed, the order stands.
"""

from __future__ import annotations

import structlog

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.domain.exceptions import EmptyCartError
from storefront.domain.model.value_objects import check_id
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CreateOrderFromCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: int,
        shipping_address: str,
        billing_address: str,
        payment_method: str,
    ) -> OrderDTO:
        check_id(user_id, "user ID")
        with self._uow:
            cart_items = self._uow.carts.list_for_user(user_id)
        if not cart_items:
            raise EmptyCartError("Cart is empty")

        # The cart's snapshotted price is what the customer saw
        specs = [
            OrderItemSpec(
                product_id=item.product_id,
                quantity=item.quantity.value,
                price=str(item.price.amount),
            )
            for item in cart_items
        ]

        dto = CreateOrderHandler(self._uow).handle(
            user_id=user_id,
            item_specs=specs,
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment_method=payment_method,
        )

        with self._uow:
            self._uow.carts.clear(user_id)
        logger.info("Cart checked out", user_id=user_id, order_id=dto.id)
        return dto
