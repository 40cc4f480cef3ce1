from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import timezone, tzinfo

from barpos.application.ports.repositories import OrderRepository
from barpos.application.use_cases.context import Clock, utc_now
from barpos.domain.common.money import Currency, format_money
from barpos.domain.order.entities import OrderStatus, OrderWithItems

HISTORY_HEADER = ["Order Number", "Created At", "Amount", "Status", "Items"]

STATUS_LABELS: dict[OrderStatus, str] = {
    OrderStatus.NEW: "New",
    OrderStatus.IN_PROGRESS: "In Progress",
    OrderStatus.READY: "Ready",
}


@dataclass(frozen=True)
class OrderHistoryExport:
    filename: str
    content: str
    row_count: int


def summarize_items(order_with_items: OrderWithItems) -> str:
    return ", ".join(
        f"{row.menu_item.name} × {row.item.quantity}" for row in order_with_items.items
    )


def history_row(
    order_with_items: OrderWithItems,
    currency: Currency,
    display_timezone: tzinfo = timezone.utc,
) -> list[str]:
    order = order_with_items.order
    return [
        order.order_number,
        order.created_at.astimezone(display_timezone).strftime("%Y/%m/%d %H:%M:%S"),
        format_money(order.total_amount, currency),
        STATUS_LABELS[order.status],
        summarize_items(order_with_items),
    ]


class ExportOrderHistory:
    """Render every order as one CSV row.

    Fields holding a comma, a double quote or a line break are quoted and
    embedded quotes are doubled. Timestamps and the filename date are in the
    venue's display timezone.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        currency: Currency,
        clock: Clock = utc_now,
        display_timezone: tzinfo = timezone.utc,
    ) -> None:
        self._order_repository = order_repository
        self._currency = currency
        self._clock = clock
        self._display_timezone = display_timezone

    def execute(self) -> OrderHistoryExport:
        orders = self._order_repository.list_orders_with_items()

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        writer.writerow(HISTORY_HEADER)
        for order_with_items in orders:
            writer.writerow(history_row(order_with_items, self._currency, self._display_timezone))

        exported_on = self._clock().astimezone(self._display_timezone)
        return OrderHistoryExport(
            filename=f"order_history_{exported_on:%Y%m%d}.csv",
            content=buffer.getvalue(),
            row_count=len(orders),
        )
