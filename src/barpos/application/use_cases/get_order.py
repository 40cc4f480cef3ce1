from __future__ import annotations

from typing import TypeVar

from barpos.application.dto.responses import OrderResponse, OrderWithItemsResponse
from barpos.application.mappers.order_mapper import (
    to_order_response,
    to_order_with_items_response,
)
from barpos.application.ports.repositories import OrderRepository
from barpos.application.use_cases.errors import (
    InvalidOrderListQueryError,
    InvalidOrderStatusFilterError,
    OrderNotFoundError,
)
from barpos.domain.common.ids import OrderId
from barpos.domain.order.entities import Order, OrderStatus, OrderWithItems

_Row = TypeVar("_Row", Order, OrderWithItems)

_STATUS_MAP: dict[str, OrderStatus | None] = {
    "all": None,
    "new": OrderStatus.NEW,
    "in-progress": OrderStatus.IN_PROGRESS,
    "ready": OrderStatus.READY,
}


class GetOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(
        self,
        order_id: OrderId,
        with_items: bool = False,
    ) -> OrderResponse | OrderWithItemsResponse:
        if with_items:
            order_with_items = self._order_repository.get_order_with_items(order_id)
            if order_with_items is None:
                raise OrderNotFoundError(f"order {order_id} not found")
            return to_order_with_items_response(order_with_items)

        order = self._order_repository.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        return to_order_response(order)


class ListOrders:
    """Orders in creation order, optionally joined with items and filtered by status.

    ``newest_first`` reverses the order before ``limit`` is applied, so
    ``newest_first=True, limit=10`` is the recent-history view.
    """

    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(
        self,
        with_items: bool = False,
        status: str = "all",
        newest_first: bool = False,
        limit: int | None = None,
    ) -> list[OrderResponse] | list[OrderWithItemsResponse]:
        normalized_status = status.strip().lower()
        if normalized_status not in _STATUS_MAP:
            raise InvalidOrderStatusFilterError(f"invalid order status filter: {status}")
        if limit is not None and limit < 1:
            raise InvalidOrderListQueryError("limit must be >= 1")
        wanted = _STATUS_MAP[normalized_status]

        if with_items:
            joined = [
                order_with_items
                for order_with_items in self._order_repository.list_orders_with_items()
                if wanted is None or order_with_items.order.status == wanted
            ]
            return [
                to_order_with_items_response(row)
                for row in _window(joined, newest_first, limit)
            ]

        orders = [
            order
            for order in self._order_repository.list_orders()
            if wanted is None or order.status == wanted
        ]
        return [to_order_response(order) for order in _window(orders, newest_first, limit)]


def _window(rows: list[_Row], newest_first: bool, limit: int | None) -> list[_Row]:
    if newest_first:
        rows = rows[::-1]
    if limit is not None:
        rows = rows[:limit]
    return rows
