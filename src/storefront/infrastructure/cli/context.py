"""State shared by every CLI command for one invocation."""

from __future__ import annotations

from dataclasses import dataclass

import click

from storefront.domain.model.principal import Principal
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.bootstrap import unit_of_work
from storefront.infrastructure.persistence.database import Database


@dataclass
class CliContext:
    database: Database
    user_id: int | None = None
    is_admin: bool = False

    def uow(self) -> UnitOfWork:
        return unit_of_work(self.database)

    def principal(self) -> Principal:
        """The caller identity given on the command line."""
        if self.user_id is None:
            raise click.UsageError("This command requires --user-id")
        return Principal(user_id=self.user_id, is_admin=self.is_admin)
