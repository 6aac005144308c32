"""Application services: catalog queries."""

from __future__ import annotations

from storefront.application.dto import (
    PaginationDTO,
    ProductDTO,
    ProductPageDTO,
    product_to_dto,
)
from storefront.application.list_orders import DEFAULT_LIMIT, page_offset
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import check_id
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> ProductDTO:
        check_id(product_id, "product ID")
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        return product_to_dto(product)


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, page: int = 1, limit: int = DEFAULT_LIMIT, category: str | None = None
    ) -> ProductPageDTO:
        """Active products, newest first."""
        offset = page_offset(page, limit)
        with self._uow:
            products = self._uow.products.list_active(offset, limit, category)
            total = self._uow.products.count_active(category)
        return ProductPageDTO(
            products=[product_to_dto(p) for p in products],
            pagination=PaginationDTO.of(page, limit, total),
        )


class ListCategoriesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[str]:
        with self._uow:
            return self._uow.products.list_categories()
