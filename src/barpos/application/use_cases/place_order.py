from __future__ import annotations

import logging
from datetime import datetime

from barpos.application.dto.requests import PlaceOrderRequest
from barpos.application.dto.responses import OrderWithItemsResponse
from barpos.application.mappers.order_mapper import to_order_with_items_response
from barpos.application.metrics.order_lifecycle import record_order_placed
from barpos.application.order_numbers import OrderNumberAllocator
from barpos.application.ports.repositories import (
    MenuRepository,
    OrderNumberConflictError,
    OrderRepository,
)
from barpos.application.use_cases.context import Clock, utc_now
from barpos.application.use_cases.errors import (
    DuplicateOrderNumberError,
    OrderNumberUnavailableError,
)
from barpos.application.use_cases.order_lines import resolve_order_lines
from barpos.domain.order.entities import (
    OrderItemDraft,
    OrderStatus,
    OrderWithItems,
    create_order_draft,
)
from barpos.domain.pricing.strategies import PricingStrategy

logger = logging.getLogger(__name__)


class PlaceOrder:
    def __init__(
        self,
        menu_repository: MenuRepository,
        order_repository: OrderRepository,
        pricing: PricingStrategy,
        order_numbers: OrderNumberAllocator,
        initial_status: OrderStatus = OrderStatus.IN_PROGRESS,
        clock: Clock = utc_now,
        max_number_attempts: int = 5,
    ) -> None:
        self._menu_repository = menu_repository
        self._order_repository = order_repository
        self._pricing = pricing
        self._order_numbers = order_numbers
        self._initial_status = initial_status
        self._clock = clock
        self._max_number_attempts = max_number_attempts

    def execute(self, request_dto: PlaceOrderRequest) -> OrderWithItemsResponse:
        resolved = resolve_order_lines(request_dto.items, self._menu_repository)
        # client-supplied prices are never trusted; the active strategy sets the total
        quote = self._pricing.quote(resolved.pricing_lines)

        requested_number = (request_dto.order_number or "").strip() or None
        if requested_number is not None:
            if self._order_repository.get_order_by_number(requested_number) is not None:
                raise DuplicateOrderNumberError(f"order number {requested_number} already exists")

        now = self._clock()
        created = self._persist(requested_number, resolved.item_drafts, quote.total, now)

        record_order_placed(created.order)
        logger.info(
            "order_placed",
            extra={
                "order_id": int(created.order.order_id),
                "order_number": created.order.order_number,
                "status": created.order.status.value,
                "total_amount": created.order.total_amount,
            },
        )
        return to_order_with_items_response(created)

    def _persist(
        self,
        requested_number: str | None,
        item_drafts: list[OrderItemDraft],
        total_amount: int,
        now: datetime,
    ) -> OrderWithItems:
        for _ in range(self._max_number_attempts):
            order_number = requested_number or self._order_numbers.next_number()
            draft = create_order_draft(
                order_number=order_number,
                status=self._initial_status,
                items=item_drafts,
                total_amount=total_amount,
                now=now,
            )
            try:
                return self._order_repository.add_order(draft)
            except OrderNumberConflictError as exc:
                if requested_number is not None:
                    raise DuplicateOrderNumberError(str(exc)) from exc
                logger.warning("order_number_collision", extra={"order_number": order_number})

        raise OrderNumberUnavailableError(
            f"could not allocate an order number after {self._max_number_attempts} attempts"
        )
