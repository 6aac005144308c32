"""Application service: Add Product use case (admin)."""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.model.principal import Principal
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        principal: Principal,
        name: str,
        description: str,
        price: str,
        category: str,
        image_url: str,
        stock: int,
    ) -> ProductDTO:
        """Add a new, active product to the catalog."""
        principal.require_admin()
        product = Product.create(
            name=name,
            description=description,
            price=Money.of(price),
            category=category,
            image_url=image_url,
            stock=stock,
        )
        with self._uow:
            product = self._uow.products.add(product)

        logger.info("Product added", product_id=product.id, name=product.name)
        return product_to_dto(product)
