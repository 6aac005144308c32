"""Abstract repository for cart entries."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import CartItem
from storefront.domain.model.value_objects import Money


class CartRepository(ABC):

    @abstractmethod
    def get(self, user_id: int, product_id: int) -> CartItem | None:
        """Return the entry for (user, product), or None."""

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[CartItem]:
        """Return every entry in the user's cart, newest first."""

    @abstractmethod
    def add(self, item: CartItem) -> CartItem:
        """Insert a new entry and assign its ID."""

    @abstractmethod
    def increment_quantity(
        self, user_id: int, product_id: int, quantity: int
    ) -> CartItem | None:
        """Add ``quantity`` to an existing entry in a single statement."""

    @abstractmethod
    def set_quantity(
        self, user_id: int, product_id: int, quantity: int
    ) -> CartItem | None:
        """Overwrite the quantity of an entry; None if there is no entry."""

    @abstractmethod
    def remove(self, user_id: int, product_id: int) -> bool:
        """Delete one entry; return whether a row was affected."""

    @abstractmethod
    def clear(self, user_id: int) -> bool:
        """Delete every entry of the user; return whether any existed."""

    @abstractmethod
    def total(self, user_id: int) -> Money:
        """Sum of price * quantity, zero for an empty cart."""

    @abstractmethod
    def item_count(self, user_id: int) -> int:
        """Sum of quantities, zero for an empty cart."""
