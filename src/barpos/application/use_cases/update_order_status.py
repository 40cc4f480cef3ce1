from __future__ import annotations

import logging

from barpos.application.dto.responses import OrderWithItemsResponse
from barpos.application.mappers.order_mapper import to_order_with_items_response
from barpos.application.metrics.order_lifecycle import record_time_to_ready, record_transition
from barpos.application.ports.repositories import OrderRepository
from barpos.application.use_cases.context import Clock, utc_now
from barpos.application.use_cases.errors import InvalidOrderTransitionError, OrderNotFoundError
from barpos.domain.common.ids import OrderId
from barpos.domain.order.entities import OrderStatus, OrderTransitionError

logger = logging.getLogger(__name__)


class UpdateOrderStatus:
    def __init__(self, order_repository: OrderRepository, clock: Clock = utc_now) -> None:
        self._order_repository = order_repository
        self._clock = clock

    def execute(self, order_id: OrderId, status: OrderStatus) -> OrderWithItemsResponse:
        order = self._order_repository.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")

        if order.status != status:
            try:
                moved = order.transition_to(status, self._clock())
            except OrderTransitionError as exc:
                raise InvalidOrderTransitionError(str(exc)) from exc

            updated = self._order_repository.update_order_status(
                order_id=order_id,
                status=moved.status,
                updated_at=moved.updated_at,
            )
            if updated is None:
                raise OrderNotFoundError(f"order {order_id} not found")

            record_transition(from_status=order.status, to_status=updated.status)
            if updated.status == OrderStatus.READY:
                record_time_to_ready(updated, now=updated.updated_at)
            logger.info(
                "order_status_changed",
                extra={
                    "order_id": int(order_id),
                    "from_status": order.status.value,
                    "to_status": updated.status.value,
                },
            )

        current = self._order_repository.get_order_with_items(order_id)
        if current is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        return to_order_with_items_response(current)
