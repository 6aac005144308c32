"""Application service: Update Product use case (admin)."""

from __future__ import annotations

from typing import Any

import structlog

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.model.principal import Principal
from storefront.domain.model.value_objects import check_id
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, principal: Principal, product_id: int, changes: dict[str, Any]
    ) -> ProductDTO | None:
        """Apply a sparse update to a product; None if it does not exist.

        This does NOT affect existing cart entries or orders; they
        captured a price snapshot of their own.
        """
        principal.require_admin()
        check_id(product_id, "product ID")
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                return None
            product.apply_changes(changes)
            self._uow.products.update(product)

        logger.info(
            "Product updated",
            product_id=product_id,
            fields=sorted(k for k, v in changes.items() if v is not None),
        )
        return product_to_dto(product)


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, principal: Principal, product_id: int) -> bool:
        """Remove a product from the catalog; False if it did not exist."""
        principal.require_admin()
        check_id(product_id, "product ID")
        with self._uow:
            deleted = self._uow.products.delete(product_id)
        if deleted:
            logger.info("Product deleted", product_id=product_id)
        return deleted
