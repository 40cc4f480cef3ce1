from __future__ import annotations

import logging

from barpos.application.dto.requests import EditOrderRequest
from barpos.application.dto.responses import OrderWithItemsResponse
from barpos.application.mappers.order_mapper import to_order_with_items_response
from barpos.application.metrics.order_lifecycle import record_order_edited, record_transition
from barpos.application.ports.repositories import (
    MenuRepository,
    OrderNumberConflictError,
    OrderRepository,
    OrderStatusConflictError,
)
from barpos.application.use_cases.context import Clock, utc_now
from barpos.application.use_cases.errors import (
    DuplicateOrderNumberError,
    InvalidOrderTransitionError,
    OrderNotEditableError,
    OrderNotFoundError,
    OrderValidationError,
)
from barpos.application.use_cases.order_lines import resolve_order_lines, validate_order_lines
from barpos.domain.common.ids import OrderId
from barpos.domain.order.entities import OrderNotEditableError as DomainOrderNotEditableError
from barpos.domain.order.entities import OrderTransitionError
from barpos.domain.pricing.strategies import PricingStrategy

logger = logging.getLogger(__name__)


class EditOrder:
    """Replace an order's items in place, keeping its id and creation time.

    The new item set is validated and priced before anything is written, and
    the header and items are swapped in a single store call, so a failed edit
    leaves the previous order untouched.
    """

    def __init__(
        self,
        menu_repository: MenuRepository,
        order_repository: OrderRepository,
        pricing: PricingStrategy,
        clock: Clock = utc_now,
    ) -> None:
        self._menu_repository = menu_repository
        self._order_repository = order_repository
        self._pricing = pricing
        self._clock = clock

    def execute(self, order_id: OrderId, request_dto: EditOrderRequest) -> OrderWithItemsResponse:
        validate_order_lines(request_dto.items)
        order_number = request_dto.order_number.strip()
        if not order_number:
            raise OrderValidationError("orderNumber must be non-empty")

        order = self._order_repository.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        try:
            order.ensure_editable()
        except DomainOrderNotEditableError as exc:
            raise OrderNotEditableError(str(exc)) from exc

        resolved = resolve_order_lines(request_dto.items, self._menu_repository)
        quote = self._pricing.quote(resolved.pricing_lines)

        if order_number != order.order_number:
            clash = self._order_repository.get_order_by_number(order_number)
            if clash is not None and clash.order_id != order.order_id:
                raise DuplicateOrderNumberError(f"order number {order_number} already exists")

        try:
            revised = order.revise(
                order_number=order_number,
                status=request_dto.status,
                total_amount=quote.total,
                now=self._clock(),
            )
        except OrderTransitionError as exc:
            raise InvalidOrderTransitionError(str(exc)) from exc

        try:
            replaced = self._order_repository.replace_order(revised, resolved.item_drafts)
        except OrderNumberConflictError as exc:
            raise DuplicateOrderNumberError(str(exc)) from exc
        except OrderStatusConflictError as exc:
            # the kitchen moved the order on after it was read
            raise OrderNotEditableError(str(exc)) from exc
        if replaced is None:
            raise OrderNotFoundError(f"order {order_id} not found")

        if revised.status != order.status:
            record_transition(from_status=order.status, to_status=revised.status)
        record_order_edited(replaced.order)
        logger.info(
            "order_edited",
            extra={
                "order_id": int(order_id),
                "order_number": replaced.order.order_number,
                "status": replaced.order.status.value,
                "total_amount": replaced.order.total_amount,
            },
        )
        return to_order_with_items_response(replaced)
