"""Abstract Unit of Work: the transaction boundary.

Use as a context manager. Inside the ``with`` block the ``products``,
``carts`` and ``orders`` repositories share one transaction; it commits
when the block exits cleanly and rolls back when it raises.

    with uow:
        order_id = uow.orders.add(order)
        uow.products.decrement_stock(product_id, 2)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    carts: CartRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self._commit()
        else:
            self._rollback()

    @abstractmethod
    def _begin(self) -> None:
        """Open a transaction and bind the repositories to it."""

    @abstractmethod
    def _commit(self) -> None:
        """Make every change of the block durable."""

    @abstractmethod
    def _rollback(self) -> None:
        """Discard every change of the block."""
