"""SQL implementation of UnitOfWork.

Each ``with`` block checks out one connection from the engine's pool,
opens a transaction on it and binds fresh repositories to that
connection. Store errors raised inside the block, or by the commit,
are rolled back and re-raised as TransactionFailureError.
"""

from __future__ import annotations

from sqlalchemy import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.exceptions import TransactionFailureError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.sql_cart_repository import SqlCartRepository
from storefront.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from storefront.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._connection: Connection | None = None

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        except SQLAlchemyError as commit_exc:
            raise TransactionFailureError(f"Commit failed: {commit_exc}") from commit_exc
        finally:
            self._close()

        if isinstance(exc, SQLAlchemyError):
            raise TransactionFailureError(f"Transaction rolled back: {exc}") from exc

    # --- UnitOfWork hooks -----------------------------------------------------

    def _begin(self) -> None:
        if self._connection is not None:
            raise RuntimeError("Unit of work is already in progress")
        self._connection = self._engine.connect()
        self._connection.begin()
        self.products = SqlProductRepository(self._connection)
        self.carts = SqlCartRepository(self._connection)
        self.orders = SqlOrderRepository(self._connection)

    def _commit(self) -> None:
        try:
            self._connection.commit()  # type: ignore[union-attr]
        except SQLAlchemyError:
            self._connection.rollback()  # type: ignore[union-attr]
            raise

    def _rollback(self) -> None:
        self._connection.rollback()  # type: ignore[union-attr]

    def _close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
