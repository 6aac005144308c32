"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from storefront.domain.model.order import Order, OrderItem


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> int:
        """Insert the order header (without items) and return its new ID."""

    @abstractmethod
    def add_item(self, order_id: int, item: OrderItem) -> OrderItem:
        """Insert one item belonging to ``order_id`` and assign its ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    def list_for_user(self, user_id: int, offset: int, limit: int) -> list[Order]:
        """Return a page of the user's orders, newest first."""

    @abstractmethod
    def count_for_user(self, user_id: int) -> int:
        """Count every order placed by the user."""

    @abstractmethod
    def list_all(self, offset: int, limit: int) -> list[Order]:
        """Return a page of all orders, newest first."""

    @abstractmethod
    def count_all(self) -> int:
        """Count every order."""

    @abstractmethod
    def update(self, order_id: int, changes: dict[str, Any], updated_at: datetime) -> bool:
        """Write the given fields plus ``updated_at``; False if no such order."""

    @abstractmethod
    def delete(self, order_id: int) -> bool:
        """Delete the order's items, then the order; return whether it existed."""
