"""Application service: Update Order use case (admin)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.model.order import validate_changes
from storefront.domain.model.principal import Principal
from storefront.domain.model.value_objects import check_id
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, principal: Principal, order_id: int, changes: dict[str, Any]
    ) -> OrderDTO | None:
        """Apply a sparse update to an order.

        Only the fields present in ``changes`` (and not None) are written;
        ``updated_at`` is refreshed every time. Returns None when the order
        does not exist.

        Admins may move an order to any status. A move the status machine
        would not allow is still applied, and logged as a warning.
        """
        principal.require_admin()
        check_id(order_id, "order ID")
        fields = validate_changes(changes)

        with self._uow:
            current = self._uow.orders.get_by_id(order_id)
            if current is None:
                return None

            target = fields.get("status")
            if target is not None and target != current.status:
                if not current.status.can_transition_to(target):
                    logger.warning(
                        "Order status moved outside the normal lifecycle",
                        order_id=order_id,
                        from_status=current.status.value,
                        to_status=target.value,
                        admin_id=principal.user_id,
                    )

            self._uow.orders.update(order_id, fields, datetime.now(timezone.utc))
            updated = self._uow.orders.get_by_id(order_id)

        logger.info(
            "Order updated",
            order_id=order_id,
            fields=sorted(fields),
            admin_id=principal.user_id,
        )
        return order_to_dto(updated)  # type: ignore[arg-type]
