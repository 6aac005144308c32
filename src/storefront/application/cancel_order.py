"""Application service: Cancel Order use case.

Customers may cancel their own orders while they are still pending.
Stock decremented when the order was placed is NOT returned to the
catalog; see DESIGN.md.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ForbiddenError
from storefront.domain.model.principal import Principal
from storefront.domain.model.value_objects import check_id
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, principal: Principal, order_id: int) -> OrderDTO:
        check_id(order_id, "order ID")
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            # Ownership only; admins use the update command instead
            if not order.is_owned_by(principal.user_id):
                raise ForbiddenError(f"Access denied to order #{order_id}")

            order.cancel()
            self._uow.orders.update(
                order_id, {"status": order.status}, order.updated_at
            )
            cancelled = self._uow.orders.get_by_id(order_id)

        logger.info("Order cancelled", order_id=order_id, user_id=principal.user_id)
        return order_to_dto(cancelled)  # type: ignore[arg-type]
