"""SQL implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Connection, delete, func, insert, select, update
from sqlalchemy.engine import RowMapping

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.schema import as_utc, products


class SqlProductRepository(ProductRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._conn.execute(
            select(products).where(products.c.id == product_id)
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def list_active(
        self, offset: int, limit: int, category: str | None = None
    ) -> list[Product]:
        stmt = (
            select(products)
            .where(*self._active_filter(category))
            .order_by(products.c.created_at.desc(), products.c.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return [self._to_domain(row) for row in self._conn.execute(stmt).mappings()]

    def count_active(self, category: str | None = None) -> int:
        stmt = select(func.count()).select_from(products).where(*self._active_filter(category))
        return self._conn.execute(stmt).scalar_one()

    def list_categories(self) -> list[str]:
        stmt = (
            select(products.c.category)
            .where(products.c.is_active.is_(True))
            .distinct()
            .order_by(products.c.category)
        )
        return list(self._conn.execute(stmt).scalars())

    def add(self, product: Product) -> Product:
        result = self._conn.execute(insert(products).values(**self._to_row(product)))
        product.id = result.inserted_primary_key[0]
        return product

    def update(self, product: Product) -> bool:
        row = self._to_row(product)
        del row["created_at"]
        result = self._conn.execute(
            update(products).where(products.c.id == product.id).values(**row)
        )
        return result.rowcount > 0

    def delete(self, product_id: int) -> bool:
        result = self._conn.execute(delete(products).where(products.c.id == product_id))
        return result.rowcount > 0

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        # Compare-and-decrement: zero rows touched means short of stock
        result = self._conn.execute(
            update(products)
            .where(products.c.id == product_id, products.c.stock >= quantity)
            .values(
                stock=products.c.stock - quantity,
                updated_at=datetime.now(timezone.utc),
            )
        )
        return result.rowcount == 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _active_filter(category: str | None) -> list:
        clauses = [products.c.is_active.is_(True)]
        if category:
            clauses.append(products.c.category == category)
        return clauses

    @staticmethod
    def _to_row(product: Product) -> dict:
        return {
            "name": product.name,
            "description": product.description,
            "price_cents": product.price.cents,
            "category": product.category,
            "image_url": product.image_url,
            "stock": product.stock,
            "is_active": product.is_active,
            "created_at": product.created_at,
            "updated_at": product.updated_at,
        }

    @staticmethod
    def _to_domain(row: RowMapping) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            price=Money.from_cents(row["price_cents"]),
            category=row["category"],
            image_url=row["image_url"],
            stock=row["stock"],
            is_active=bool(row["is_active"]),
            created_at=as_utc(row["created_at"]),
            updated_at=as_utc(row["updated_at"]),
        )
