"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging import configure_logging
from storefront.infrastructure.persistence.database import Database
from storefront.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


def start(settings: Settings) -> Database:
    """Configure logging and open the store for the life of the process."""
    configure_logging(settings.log_level, settings.log_format)
    return Database(settings.database_url, echo=settings.echo_sql)


def unit_of_work(database: Database) -> SqlUnitOfWork:
    return SqlUnitOfWork(database.engine)
