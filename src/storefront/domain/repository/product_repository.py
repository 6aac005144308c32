"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_active(
        self, offset: int, limit: int, category: str | None = None
    ) -> list[Product]:
        """Return a page of active products, newest first."""

    @abstractmethod
    def count_active(self, category: str | None = None) -> int:
        """Count active products, optionally within one category."""

    @abstractmethod
    def list_categories(self) -> list[str]:
        """Return the distinct categories of active products, sorted."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Insert a new product and assign its ID."""

    @abstractmethod
    def update(self, product: Product) -> bool:
        """Persist changes to an existing product; False if it is gone."""

    @abstractmethod
    def delete(self, product_id: int) -> bool:
        """Delete a product; return whether it existed."""

    @abstractmethod
    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """Take ``quantity`` units out of stock.

        Must be a conditional update: stock is only reduced when at least
        ``quantity`` units remain. Returns False (and changes nothing)
        when the product is missing or short of stock.
        """
