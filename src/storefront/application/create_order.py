"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model inside
one unit of work. Either the order, every one of its items and every
stock decrement are committed together, or none of them are.

Prices come from the caller (``OrderItemSpec.price``), not from the
catalog. Checkout passes the prices snapshotted in the cart; a direct
order passes whatever the client quoted.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    TransactionFailureError,
)
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.value_objects import Money, Quantity, check_id
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: int,
        item_specs: list[OrderItemSpec],
        shipping_address: str,
        billing_address: str,
        payment_method: str,
    ) -> OrderDTO:
        """Place a new order.

        Steps:
        1. Build OrderItems from the specs and let the Order aggregate
           validate them and freeze the total.
        2. In one transaction: insert the order, then for each item read
           the product snapshot, insert the item and decrement stock.
        3. Re-read the committed order and return a DTO.
        """
        items = [
            OrderItem(
                product_id=check_id(spec.product_id, "product ID"),
                quantity=Quantity(spec.quantity),
                price=Money.of(spec.price),
            )
            for spec in item_specs
        ]
        order = Order.create(
            user_id=user_id,
            items=items,
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment_method=payment_method,
        )

        try:
            with self._uow:
                order_id = self._uow.orders.add(order)
                for item in order.items:
                    product = self._uow.products.get_by_id(item.product_id)
                    if product is None:
                        raise EntityNotFoundError(f"Product #{item.product_id} not found")
                    item.take_snapshot(product)
                    self._uow.orders.add_item(order_id, item)

                    qty = item.quantity.value
                    if not self._uow.products.decrement_stock(item.product_id, qty):
                        raise InsufficientStockError(
                            f"Insufficient stock for {product.name} "
                            f"(need {qty}, have {product.stock})"
                        )
        except Exception as exc:
            logger.warning(
                "Order creation rolled back",
                user_id=user_id,
                error=type(exc).__name__,
                reason=str(exc),
            )
            raise

        with self._uow:
            created = self._uow.orders.get_by_id(order_id)
        if created is None:
            raise TransactionFailureError(f"Failed to retrieve created order #{order_id}")

        logger.info(
            "Order created",
            order_id=order_id,
            user_id=user_id,
            items=len(created.items),
            total_amount=str(created.total_amount),
        )
        return order_to_dto(created)
