"""SQL implementation of CartRepository."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Connection, delete, func, insert, select, update
from sqlalchemy.engine import RowMapping

from storefront.domain.model.cart import CartItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.schema import as_utc, cart_items


class SqlCartRepository(CartRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- CartRepository interface ---------------------------------------------

    def get(self, user_id: int, product_id: int) -> CartItem | None:
        row = self._conn.execute(
            select(cart_items).where(*self._key(user_id, product_id))
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def list_for_user(self, user_id: int) -> list[CartItem]:
        stmt = (
            select(cart_items)
            .where(cart_items.c.user_id == user_id)
            .order_by(cart_items.c.created_at.desc(), cart_items.c.id.desc())
        )
        return [self._to_domain(row) for row in self._conn.execute(stmt).mappings()]

    def add(self, item: CartItem) -> CartItem:
        result = self._conn.execute(
            insert(cart_items).values(
                user_id=item.user_id,
                product_id=item.product_id,
                quantity=item.quantity.value,
                product_name=item.product_name,
                price_cents=item.price.cents,
                image_url=item.image_url,
                created_at=item.created_at,
                updated_at=item.updated_at,
            )
        )
        item.id = result.inserted_primary_key[0]
        return item

    def increment_quantity(
        self, user_id: int, product_id: int, quantity: int
    ) -> CartItem | None:
        return self._update_quantity(
            user_id, product_id, cart_items.c.quantity + quantity
        )

    def set_quantity(
        self, user_id: int, product_id: int, quantity: int
    ) -> CartItem | None:
        return self._update_quantity(user_id, product_id, quantity)

    def remove(self, user_id: int, product_id: int) -> bool:
        result = self._conn.execute(
            delete(cart_items).where(*self._key(user_id, product_id))
        )
        return result.rowcount > 0

    def clear(self, user_id: int) -> bool:
        result = self._conn.execute(
            delete(cart_items).where(cart_items.c.user_id == user_id)
        )
        return result.rowcount > 0

    def total(self, user_id: int) -> Money:
        stmt = select(
            func.coalesce(func.sum(cart_items.c.quantity * cart_items.c.price_cents), 0)
        ).where(cart_items.c.user_id == user_id)
        return Money.from_cents(self._conn.execute(stmt).scalar_one())

    def item_count(self, user_id: int) -> int:
        stmt = select(func.coalesce(func.sum(cart_items.c.quantity), 0)).where(
            cart_items.c.user_id == user_id
        )
        return int(self._conn.execute(stmt).scalar_one())

    # --- Helpers --------------------------------------------------------------

    def _update_quantity(self, user_id: int, product_id: int, quantity) -> CartItem | None:
        result = self._conn.execute(
            update(cart_items)
            .where(*self._key(user_id, product_id))
            .values(quantity=quantity, updated_at=datetime.now(timezone.utc))
        )
        if result.rowcount == 0:
            return None
        return self.get(user_id, product_id)

    @staticmethod
    def _key(user_id: int, product_id: int) -> tuple:
        return (cart_items.c.user_id == user_id, cart_items.c.product_id == product_id)

    @staticmethod
    def _to_domain(row: RowMapping) -> CartItem:
        return CartItem(
            id=row["id"],
            user_id=row["user_id"],
            product_id=row["product_id"],
            quantity=Quantity(row["quantity"]),
            product_name=row["product_name"],
            price=Money.from_cents(row["price_cents"]),
            image_url=row["image_url"],
            created_at=as_utc(row["created_at"]),
            updated_at=as_utc(row["updated_at"]),
        )
