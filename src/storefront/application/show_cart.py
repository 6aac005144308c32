"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_item_to_dto
from storefront.domain.model.value_objects import check_id
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> CartDTO:
        check_id(user_id, "user ID")
        with self._uow:
            items = self._uow.carts.list_for_user(user_id)
            total = self._uow.carts.total(user_id)
            item_count = self._uow.carts.item_count(user_id)

        return CartDTO(
            items=[cart_item_to_dto(item) for item in items],
            total=str(total),
            item_count=item_count,
        )
