"""The store handle: owns the SQLAlchemy engine and its connection pool.

Built once by the composition root and passed to whatever needs it;
``dispose()`` releases pooled connections on shutdown.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from storefront.infrastructure.persistence.schema import metadata

logger = structlog.get_logger(__name__)


class Database:

    def __init__(self, url: str, echo: bool = False) -> None:
        self._url = make_url(url)
        self._engine = self._create_engine(echo)

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_schema(self) -> None:
        metadata.create_all(self._engine)
        logger.info("Schema created", database=self._url.render_as_string(hide_password=True))

    def drop_schema(self) -> None:
        metadata.drop_all(self._engine)
        logger.info("Schema dropped", database=self._url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        self._engine.dispose()

    # --- Engine construction --------------------------------------------------

    def _create_engine(self, echo: bool) -> Engine:
        if self._url.get_backend_name() != "sqlite":
            return create_engine(self._url, echo=echo, pool_pre_ping=True)

        database = self._url.database
        if not database or database == ":memory:":
            # Every connection to an in-memory database would otherwise get its own
            engine = create_engine(
                self._url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            Path(database).parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(self._url, echo=echo)

        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
