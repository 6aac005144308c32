"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ForbiddenError
from storefront.domain.model.principal import Principal
from storefront.domain.model.value_objects import check_id
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, principal: Principal, order_id: int) -> OrderDTO:
        """Users see their own orders; admins see every order."""
        check_id(order_id, "order ID")
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if not principal.can_view(order.user_id):
            raise ForbiddenError(f"Access denied to order #{order_id}")
        return order_to_dto(order)
