"""Shared fixtures for the SQL-backed tests.

Each test gets its own in-memory SQLite database with the schema
already created.
"""

import pytest
import structlog

from storefront.domain.model.product import Product
from storefront.infrastructure.persistence.database import Database
from storefront.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_schema()
    yield db
    db.dispose()


@pytest.fixture
def sql_uow(database) -> SqlUnitOfWork:
    return SqlUnitOfWork(database.engine)


@pytest.fixture
def seed_products(sql_uow):
    """Insert products in one transaction and return their new ids."""

    def seed(*products: Product) -> list[int]:
        with sql_uow:
            return [sql_uow.products.add(p).id for p in products]

    return seed
