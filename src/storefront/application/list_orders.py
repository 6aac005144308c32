"""Application service: List Orders use case (query).

Pages are 1-indexed and newest-first; ``pagination.total`` counts the
whole scope (one user's orders, or every order for admins).
"""

from __future__ import annotations

from storefront.application.dto import (
    OrderPageDTO,
    PaginationDTO,
    order_to_dto,
)
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.principal import Principal
from storefront.domain.repository.unit_of_work import UnitOfWork

DEFAULT_LIMIT = 10


def page_offset(page: int, limit: int) -> int:
    """Translate a 1-indexed page into a row offset."""
    if not isinstance(page, int) or page < 1:
        raise ValidationError(f"Page must be a positive integer, got {page!r}")
    if not isinstance(limit, int) or limit < 1:
        raise ValidationError(f"Limit must be a positive integer, got {limit!r}")
    return (page - 1) * limit


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def for_user(
        self, principal: Principal, page: int = 1, limit: int = DEFAULT_LIMIT
    ) -> OrderPageDTO:
        """The caller's own orders."""
        offset = page_offset(page, limit)
        with self._uow:
            orders = self._uow.orders.list_for_user(principal.user_id, offset, limit)
            total = self._uow.orders.count_for_user(principal.user_id)
        return OrderPageDTO(
            orders=[order_to_dto(o) for o in orders],
            pagination=PaginationDTO.of(page, limit, total),
        )

    def all(
        self, principal: Principal, page: int = 1, limit: int = DEFAULT_LIMIT
    ) -> OrderPageDTO:
        """Every order in the store. Admin only."""
        principal.require_admin()
        offset = page_offset(page, limit)
        with self._uow:
            orders = self._uow.orders.list_all(offset, limit)
            total = self._uow.orders.count_all()
        return OrderPageDTO(
            orders=[order_to_dto(o) for o in orders],
            pagination=PaginationDTO.of(page, limit, total),
        )
