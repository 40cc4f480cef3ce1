from __future__ import annotations

import logging

from barpos.application.metrics.order_lifecycle import record_order_deleted
from barpos.application.ports.repositories import OrderRepository
from barpos.application.use_cases.errors import OrderNotFoundError
from barpos.domain.common.ids import OrderId

logger = logging.getLogger(__name__)


class DeleteOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId) -> None:
        if not self._order_repository.delete_order(order_id):
            raise OrderNotFoundError(f"order {order_id} not found")
        record_order_deleted()
        logger.info("order_deleted", extra={"order_id": int(order_id)})
