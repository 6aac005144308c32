"""Application service: Delete Order use case (admin)."""

from __future__ import annotations

import structlog

from storefront.domain.model.principal import Principal
from storefront.domain.model.value_objects import check_id
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DeleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, principal: Principal, order_id: int) -> bool:
        """Delete an order and its items atomically.

        Returns whether the order existed. Stock is left untouched.
        """
        principal.require_admin()
        check_id(order_id, "order ID")
        with self._uow:
            deleted = self._uow.orders.delete(order_id)
        if deleted:
            logger.info("Order deleted", order_id=order_id, admin_id=principal.user_id)
        return deleted
