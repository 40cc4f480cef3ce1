from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from barpos.domain.common.ids import MenuItemId, OrderId, OrderItemId
from barpos.domain.common.money import ensure_non_negative
from barpos.domain.menu.entities import MenuItem


class OrderStatus(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in-progress"
    READY = "ready"


_NEXT_STATUS: dict[OrderStatus, OrderStatus | None] = {
    OrderStatus.NEW: OrderStatus.IN_PROGRESS,
    OrderStatus.IN_PROGRESS: OrderStatus.READY,
    OrderStatus.READY: None,
}

EDITABLE_STATUSES = frozenset({OrderStatus.IN_PROGRESS})


class OrderTransitionError(Exception):
    pass


class OrderNotEditableError(Exception):
    pass


@dataclass(frozen=True)
class OrderItemDraft:
    menu_item_id: MenuItemId
    quantity: int
    unit_price: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")
        ensure_non_negative(self.unit_price, "unit_price")


@dataclass(frozen=True)
class OrderItem:
    order_item_id: OrderItemId
    order_id: OrderId
    menu_item_id: MenuItemId
    quantity: int
    unit_price: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")
        ensure_non_negative(self.unit_price, "unit_price")


@dataclass(frozen=True)
class OrderDraft:
    order_number: str
    status: OrderStatus
    total_amount: int
    created_at: datetime
    items: list[OrderItemDraft] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.order_number.strip():
            raise ValueError("order_number must be non-empty")
        if not self.items:
            raise ValueError("order must contain at least one item")
        ensure_non_negative(self.total_amount, "total_amount")


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    order_number: str
    status: OrderStatus
    total_amount: int
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if not self.order_number.strip():
            raise ValueError("order_number must be non-empty")
        ensure_non_negative(self.total_amount, "total_amount")

    @property
    def is_editable(self) -> bool:
        return self.status in EDITABLE_STATUSES

    def can_transition_to(self, status: OrderStatus) -> bool:
        return _NEXT_STATUS[self.status] == status

    def transition_to(self, status: OrderStatus, now: datetime) -> Order:
        if status == self.status:
            return self
        if not self.can_transition_to(status):
            raise OrderTransitionError(
                f"cannot move order from status={self.status.value} to status={status.value}"
            )
        return replace(self, status=status, updated_at=now)

    def ensure_editable(self) -> None:
        if not self.is_editable:
            raise OrderNotEditableError(
                f"order {self.order_id} cannot be edited in status={self.status.value}"
            )

    def revise(
        self,
        *,
        order_number: str,
        status: OrderStatus,
        total_amount: int,
        now: datetime,
    ) -> Order:
        self.ensure_editable()
        moved = self.transition_to(status, now)
        return replace(moved, order_number=order_number, total_amount=total_amount, updated_at=now)


@dataclass(frozen=True)
class OrderItemWithMenuItem:
    item: OrderItem
    menu_item: MenuItem


@dataclass(frozen=True)
class OrderWithItems:
    order: Order
    items: list[OrderItemWithMenuItem] = field(default_factory=list)


def create_order_draft(
    order_number: str,
    status: OrderStatus,
    items: list[OrderItemDraft],
    total_amount: int,
    now: datetime,
) -> OrderDraft:
    if status == OrderStatus.READY:
        raise OrderTransitionError("orders cannot be created in status=ready")
    return OrderDraft(
        order_number=order_number,
        status=status,
        total_amount=total_amount,
        created_at=now,
        items=items,
    )
