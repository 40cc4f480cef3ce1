from __future__ import annotations

from datetime import datetime, timezone

from prometheus_client import Counter, Histogram

from barpos.domain.order.entities import Order, OrderStatus

ORDERS_TOTAL = Counter(
    "barpos_orders_total",
    "Total number of orders observed by status.",
    ["status"],
)

ORDER_TRANSITION_TOTAL = Counter(
    "barpos_order_transition_total",
    "Total number of order lifecycle transitions.",
    ["from", "to"],
)

ORDER_EDITS_TOTAL = Counter(
    "barpos_order_edits_total",
    "Total number of in-place order edits.",
)

ORDERS_DELETED_TOTAL = Counter(
    "barpos_orders_deleted_total",
    "Total number of deleted orders.",
)

ORDER_AMOUNT_MINOR = Histogram(
    "barpos_order_amount_minor",
    "Order totals in minor currency units.",
    buckets=(500, 700, 1200, 1500, 2200, 3000, 4500, 6000, 10000, 20000),
)

ORDER_TIME_TO_READY_SECONDS = Histogram(
    "barpos_order_time_to_ready_seconds",
    "Time between order placement and readiness.",
)


def record_order_placed(order: Order) -> None:
    ORDERS_TOTAL.labels(status=order.status.value).inc()
    ORDER_AMOUNT_MINOR.observe(order.total_amount)


def record_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_order_edited(order: Order) -> None:
    ORDER_EDITS_TOTAL.inc()
    ORDER_AMOUNT_MINOR.observe(order.total_amount)


def record_order_deleted() -> None:
    ORDERS_DELETED_TOTAL.inc()


def record_time_to_ready(order: Order, now: datetime | None = None) -> None:
    current = now or datetime.now(timezone.utc)
    ORDER_TIME_TO_READY_SECONDS.observe(max((current - order.created_at).total_seconds(), 0.0))
