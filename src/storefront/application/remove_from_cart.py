"""Application services: Remove From Cart and Clear Cart use cases."""

from __future__ import annotations

from storefront.domain.model.value_objects import check_id
from storefront.domain.repository.unit_of_work import UnitOfWork


class RemoveFromCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int, product_id: int) -> bool:
        """Remove one product from the cart; False if it was not there."""
        check_id(user_id, "user ID")
        check_id(product_id, "product ID")
        with self._uow:
            return self._uow.carts.remove(user_id, product_id)


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> bool:
        """Empty the cart; False if it was already empty."""
        check_id(user_id, "user ID")
        with self._uow:
            return self._uow.carts.clear(user_id)
