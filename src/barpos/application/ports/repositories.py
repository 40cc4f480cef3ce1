from __future__ import annotations

from datetime import datetime
from typing import Protocol

from barpos.domain.common.ids import MenuItemId, OrderId
from barpos.domain.menu.entities import MenuItem, MenuItemDraft
from barpos.domain.order.entities import (
    Order,
    OrderDraft,
    OrderItemDraft,
    OrderStatus,
    OrderWithItems,
)


class MenuRepository(Protocol):
    def list_items(self) -> list[MenuItem]: ...

    def get_item(self, item_id: MenuItemId) -> MenuItem | None: ...

    def get_items(self, item_ids: list[MenuItemId]) -> dict[MenuItemId, MenuItem]: ...

    def add_item(self, draft: MenuItemDraft) -> MenuItem: ...

    def update_item(self, item: MenuItem) -> MenuItem | None: ...

    def delete_item(self, item_id: MenuItemId) -> bool: ...


class OrderRepository(Protocol):
    def add_order(self, draft: OrderDraft) -> OrderWithItems: ...

    def get_order(self, order_id: OrderId) -> Order | None: ...

    def get_order_by_number(self, order_number: str) -> Order | None: ...

    def list_orders(self) -> list[Order]: ...

    def get_order_with_items(self, order_id: OrderId) -> OrderWithItems | None: ...

    def list_orders_with_items(self) -> list[OrderWithItems]: ...

    def update_order_status(
        self,
        order_id: OrderId,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Order | None: ...

    def replace_order(
        self,
        order: Order,
        items: list[OrderItemDraft],
    ) -> OrderWithItems | None: ...

    def delete_order(self, order_id: OrderId) -> bool: ...

    def next_order_sequence(self) -> int: ...


class OrderNumberConflictError(Exception):
    pass


class StoreUnavailableError(Exception):
    pass


class DanglingMenuItemError(Exception):
    pass


class OrderStatusConflictError(Exception):
    """The stored order left an editable status before the write could land."""
