"""SQL implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import Connection, Select, delete, func, insert, select, update
from sqlalchemy.engine import RowMapping

from storefront.domain.model.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.schema import as_utc, order_items, orders


class SqlOrderRepository(OrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> int:
        result = self._conn.execute(
            insert(orders).values(
                user_id=order.user_id,
                status=order.status.value,
                payment_status=order.payment_status.value,
                total_amount_cents=order.total_amount.cents,
                shipping_address=order.shipping_address,
                billing_address=order.billing_address,
                payment_method=order.payment_method.value,
                created_at=order.created_at,
                updated_at=order.updated_at,
            )
        )
        order.id = result.inserted_primary_key[0]
        return order.id  # type: ignore[return-value]

    def add_item(self, order_id: int, item: OrderItem) -> OrderItem:
        result = self._conn.execute(
            insert(order_items).values(
                order_id=order_id,
                product_id=item.product_id,
                quantity=item.quantity.value,
                price_cents=item.price.cents,
                product_name=item.product_name,
                image_url=item.image_url,
            )
        )
        item.id = result.inserted_primary_key[0]
        item.order_id = order_id
        return item

    def get_by_id(self, order_id: int) -> Order | None:
        found = self._fetch(select(orders).where(orders.c.id == order_id))
        return found[0] if found else None

    def list_for_user(self, user_id: int, offset: int, limit: int) -> list[Order]:
        stmt = select(orders).where(orders.c.user_id == user_id)
        return self._fetch(self._newest_first(stmt).offset(offset).limit(limit))

    def count_for_user(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(orders).where(orders.c.user_id == user_id)
        return self._conn.execute(stmt).scalar_one()

    def list_all(self, offset: int, limit: int) -> list[Order]:
        return self._fetch(self._newest_first(select(orders)).offset(offset).limit(limit))

    def count_all(self) -> int:
        return self._conn.execute(select(func.count()).select_from(orders)).scalar_one()

    def update(self, order_id: int, changes: dict[str, Any], updated_at: datetime) -> bool:
        values = {
            key: value.value if isinstance(value, Enum) else value
            for key, value in changes.items()
        }
        values["updated_at"] = updated_at
        result = self._conn.execute(
            update(orders).where(orders.c.id == order_id).values(**values)
        )
        return result.rowcount > 0

    def delete(self, order_id: int) -> bool:
        self._conn.execute(delete(order_items).where(order_items.c.order_id == order_id))
        result = self._conn.execute(delete(orders).where(orders.c.id == order_id))
        return result.rowcount > 0

    # --- Hydration ------------------------------------------------------------

    @staticmethod
    def _newest_first(stmt: Select) -> Select:
        return stmt.order_by(orders.c.created_at.desc(), orders.c.id.desc())

    def _fetch(self, stmt: Select) -> list[Order]:
        rows = self._conn.execute(stmt).mappings().all()
        if not rows:
            return []

        items_by_order: dict[int, list[OrderItem]] = {row["id"]: [] for row in rows}
        item_rows = self._conn.execute(
            select(order_items)
            .where(order_items.c.order_id.in_(list(items_by_order)))
            .order_by(order_items.c.id)
        ).mappings()
        for item_row in item_rows:
            items_by_order[item_row["order_id"]].append(self._item_to_domain(item_row))

        return [self._to_domain(row, items_by_order[row["id"]]) for row in rows]

    @staticmethod
    def _item_to_domain(row: RowMapping) -> OrderItem:
        return OrderItem(
            id=row["id"],
            order_id=row["order_id"],
            product_id=row["product_id"],
            quantity=Quantity(row["quantity"]),
            price=Money.from_cents(row["price_cents"]),
            product_name=row["product_name"],
            image_url=row["image_url"],
        )

    @staticmethod
    def _to_domain(row: RowMapping, items: list[OrderItem]) -> Order:
        return Order(
            id=row["id"],
            user_id=row["user_id"],
            items=items,
            total_amount=Money.from_cents(row["total_amount_cents"]),
            shipping_address=row["shipping_address"],
            billing_address=row["billing_address"],
            payment_method=PaymentMethod(row["payment_method"]),
            status=OrderStatus(row["status"]),
            payment_status=PaymentStatus(row["payment_status"]),
            created_at=as_utc(row["created_at"]),
            updated_at=as_utc(row["updated_at"]),
        )
