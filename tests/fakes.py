"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the SQL repositories
but keep everything in a dict. No database, no side effects. The fake
unit of work snapshots every repository on entry and restores the
snapshot on rollback, so all-or-nothing behaviour can be asserted
without SQL.
"""

from __future__ import annotations

import copy
import dataclasses
from datetime import datetime, timezone
from typing import Any

from storefront.domain.model.cart import CartItem
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.unit_of_work import UnitOfWork


def _newest_first(entities: list) -> list:
    return sorted(entities, key=lambda e: (e.created_at, e.id), reverse=True)


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[int, Product] = {}
        self._next_id = 1
        for p in products or []:
            self.add(p)

    def get_by_id(self, product_id: int) -> Product | None:
        return self._store.get(product_id)

    def list_active(
        self, offset: int, limit: int, category: str | None = None
    ) -> list[Product]:
        return _newest_first(self._active(category))[offset:offset + limit]

    def count_active(self, category: str | None = None) -> int:
        return len(self._active(category))

    def list_categories(self) -> list[str]:
        return sorted({p.category for p in self._active(None)})

    def add(self, product: Product) -> Product:
        if product.id is None:
            product.id = self._next_id
        self._next_id = max(self._next_id, product.id) + 1
        self._store[product.id] = product
        return product

    def update(self, product: Product) -> bool:
        if product.id not in self._store:
            return False
        self._store[product.id] = product
        return True

    def delete(self, product_id: int) -> bool:
        return self._store.pop(product_id, None) is not None

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        product = self._store.get(product_id)
        if product is None or product.stock < quantity:
            return False
        product.stock -= quantity
        return True

    def _active(self, category: str | None) -> list[Product]:
        return [
            p for p in self._store.values()
            if p.is_active and (not category or p.category == category)
        ]


class FakeCartRepository(CartRepository):

    def __init__(self) -> None:
        self._store: dict[tuple[int, int], CartItem] = {}
        self._next_id = 1

    def get(self, user_id: int, product_id: int) -> CartItem | None:
        return self._store.get((user_id, product_id))

    def list_for_user(self, user_id: int) -> list[CartItem]:
        return _newest_first([i for i in self._store.values() if i.user_id == user_id])

    def add(self, item: CartItem) -> CartItem:
        key = (item.user_id, item.product_id)
        if key in self._store:
            raise RuntimeError(f"Duplicate cart entry {key}")
        item.id = self._next_id
        self._next_id += 1
        self._store[key] = item
        return item

    def increment_quantity(
        self, user_id: int, product_id: int, quantity: int
    ) -> CartItem | None:
        item = self.get(user_id, product_id)
        if item is not None:
            self._set(item, item.quantity.value + quantity)
        return item

    def set_quantity(
        self, user_id: int, product_id: int, quantity: int
    ) -> CartItem | None:
        item = self.get(user_id, product_id)
        if item is not None:
            self._set(item, quantity)
        return item

    def remove(self, user_id: int, product_id: int) -> bool:
        return self._store.pop((user_id, product_id), None) is not None

    def clear(self, user_id: int) -> bool:
        keys = [k for k in self._store if k[0] == user_id]
        for key in keys:
            del self._store[key]
        return bool(keys)

    def total(self, user_id: int) -> Money:
        result = Money.zero()
        for item in self.list_for_user(user_id):
            result = result + item.line_total
        return result

    def item_count(self, user_id: int) -> int:
        return sum(i.quantity.value for i in self.list_for_user(user_id))

    @staticmethod
    def _set(item: CartItem, quantity: int) -> None:
        item.quantity = Quantity(quantity)
        item.updated_at = datetime.now(timezone.utc)


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def add(self, order: Order) -> int:
        order.id = self._next_id
        self._next_id += 1
        # Items arrive one by one through add_item
        self._store[order.id] = dataclasses.replace(order, items=[])
        return order.id

    def add_item(self, order_id: int, item: OrderItem) -> OrderItem:
        stored = self._store[order_id]
        item.id = sum(len(o.items) for o in self._store.values()) + 1
        item.order_id = order_id
        stored.items.append(dataclasses.replace(item))
        return item

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def list_for_user(self, user_id: int, offset: int, limit: int) -> list[Order]:
        mine = [o for o in self._store.values() if o.user_id == user_id]
        return _newest_first(mine)[offset:offset + limit]

    def count_for_user(self, user_id: int) -> int:
        return sum(1 for o in self._store.values() if o.user_id == user_id)

    def list_all(self, offset: int, limit: int) -> list[Order]:
        return _newest_first(list(self._store.values()))[offset:offset + limit]

    def count_all(self) -> int:
        return len(self._store)

    def update(self, order_id: int, changes: dict[str, Any], updated_at: datetime) -> bool:
        order = self._store.get(order_id)
        if order is None:
            return False
        for key, value in changes.items():
            setattr(order, key, value)
        order.updated_at = updated_at
        return True

    def delete(self, order_id: int) -> bool:
        return self._store.pop(order_id, None) is not None


class FakeUnitOfWork(UnitOfWork):

    def __init__(self, products: list[Product] | None = None) -> None:
        self.products = FakeProductRepository(products)
        self.carts = FakeCartRepository()
        self.orders = FakeOrderRepository()
        self.commits = 0
        self.rollbacks = 0
        self._snapshot: list[dict] | None = None

    def _repos(self) -> list:
        return [self.products, self.carts, self.orders]

    def _begin(self) -> None:
        self._snapshot = [copy.deepcopy(repo.__dict__) for repo in self._repos()]

    def _commit(self) -> None:
        self.commits += 1
        self._snapshot = None

    def _rollback(self) -> None:
        for repo, state in zip(self._repos(), self._snapshot or []):
            repo.__dict__.clear()
            repo.__dict__.update(state)
        self.rollbacks += 1
        self._snapshot = None


# --- Builders -----------------------------------------------------------------


def make_product(
    product_id: int | None = None,
    name: str = "Widget",
    price: str = "10.00",
    stock: int = 100,
    category: str = "Gadgets",
    is_active: bool = True,
    created_at: datetime | None = None,
) -> Product:
    product = Product(
        id=product_id,
        name=name,
        description=f"A fine {name.lower()}",
        price=Money.of(price),
        category=category,
        image_url=f"https://img.example.com/{name.lower()}.png",
        stock=stock,
        is_active=is_active,
    )
    if created_at is not None:
        product.created_at = created_at
    return product


def utc(year: int = 2024, month: int = 1, day: int = 1, minute: int = 0) -> datetime:
    return datetime(year, month, day, 12, minute, tzinfo=timezone.utc)
