from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime

from barpos.application.ports.repositories import (
    DanglingMenuItemError,
    MenuRepository,
    OrderNumberConflictError,
    OrderRepository,
    OrderStatusConflictError,
)
from barpos.domain.common.ids import MenuItemId, OrderId, OrderItemId
from barpos.domain.menu.entities import MenuItem, MenuItemDraft
from barpos.domain.order.entities import (
    EDITABLE_STATUSES,
    Order,
    OrderDraft,
    OrderItem,
    OrderItemDraft,
    OrderItemWithMenuItem,
    OrderStatus,
    OrderWithItems,
)


class InMemoryPosStore(MenuRepository, OrderRepository):
    """Process-local store for menu items, orders and order items.

    Every public method runs under one lock, so readers never observe an order
    whose items are half replaced. Id counters only move forward.
    """

    def __init__(self, order_number_start: int = 1000) -> None:
        self._lock = threading.RLock()
        self._menu_items: dict[MenuItemId, MenuItem] = {}
        self._orders: dict[OrderId, Order] = {}
        self._order_items: dict[OrderItemId, OrderItem] = {}
        self._menu_item_seq = 0
        self._order_seq = 0
        self._order_item_seq = 0
        self._order_number_seq = order_number_start

    def close(self) -> None:
        with self._lock:
            self._menu_items.clear()
            self._orders.clear()
            self._order_items.clear()

    # menu items

    def list_items(self) -> list[MenuItem]:
        with self._lock:
            return [self._menu_items[key] for key in sorted(self._menu_items)]

    def get_item(self, item_id: MenuItemId) -> MenuItem | None:
        with self._lock:
            return self._menu_items.get(item_id)

    def get_items(self, item_ids: list[MenuItemId]) -> dict[MenuItemId, MenuItem]:
        with self._lock:
            return {
                item_id: self._menu_items[item_id]
                for item_id in item_ids
                if item_id in self._menu_items
            }

    def add_item(self, draft: MenuItemDraft) -> MenuItem:
        with self._lock:
            self._menu_item_seq += 1
            item = MenuItem.from_draft(MenuItemId(self._menu_item_seq), draft)
            self._menu_items[item.item_id] = item
            return item

    def update_item(self, item: MenuItem) -> MenuItem | None:
        with self._lock:
            if item.item_id not in self._menu_items:
                return None
            self._menu_items[item.item_id] = item
            return item

    def delete_item(self, item_id: MenuItemId) -> bool:
        with self._lock:
            return self._menu_items.pop(item_id, None) is not None

    # orders

    def add_order(self, draft: OrderDraft) -> OrderWithItems:
        with self._lock:
            if self._find_by_number(draft.order_number) is not None:
                raise OrderNumberConflictError(
                    f"order number {draft.order_number} is already in use"
                )
            self._order_seq += 1
            order = Order(
                order_id=OrderId(self._order_seq),
                order_number=draft.order_number,
                status=draft.status,
                total_amount=draft.total_amount,
                created_at=draft.created_at,
                updated_at=draft.created_at,
            )
            self._orders[order.order_id] = order
            self._insert_items(order.order_id, draft.items)
            return self._join(order)

    def get_order(self, order_id: OrderId) -> Order | None:
        with self._lock:
            return self._orders.get(order_id)

    def get_order_by_number(self, order_number: str) -> Order | None:
        with self._lock:
            return self._find_by_number(order_number)

    def list_orders(self) -> list[Order]:
        with self._lock:
            return [self._orders[key] for key in sorted(self._orders)]

    def get_order_with_items(self, order_id: OrderId) -> OrderWithItems | None:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return None
            return self._join(order)

    def list_orders_with_items(self) -> list[OrderWithItems]:
        with self._lock:
            return [self._join(self._orders[key]) for key in sorted(self._orders)]

    def update_order_status(
        self,
        order_id: OrderId,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Order | None:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return None
            updated = replace(order, status=status, updated_at=updated_at)
            self._orders[order_id] = updated
            return updated

    def replace_order(
        self,
        order: Order,
        items: list[OrderItemDraft],
    ) -> OrderWithItems | None:
        with self._lock:
            if order.order_id not in self._orders:
                return None
            stored = self._orders[order.order_id]
            if stored.status not in EDITABLE_STATUSES:
                raise OrderStatusConflictError(
                    f"order {order.order_id} cannot be edited in status={stored.status.value}"
                )
            clash = self._find_by_number(order.order_number)
            if clash is not None and clash.order_id != order.order_id:
                raise OrderNumberConflictError(
                    f"order number {order.order_number} is already in use"
                )
            self._delete_items(order.order_id)
            self._orders[order.order_id] = order
            self._insert_items(order.order_id, items)
            return self._join(order)

    def delete_order(self, order_id: OrderId) -> bool:
        with self._lock:
            if self._orders.pop(order_id, None) is None:
                return False
            self._delete_items(order_id)
            return True

    def next_order_sequence(self) -> int:
        with self._lock:
            value = self._order_number_seq
            self._order_number_seq += 1
            return value

    def _find_by_number(self, order_number: str) -> Order | None:
        for order in self._orders.values():
            if order.order_number == order_number:
                return order
        return None

    def _insert_items(self, order_id: OrderId, drafts: list[OrderItemDraft]) -> None:
        for draft in drafts:
            self._order_item_seq += 1
            item = OrderItem(
                order_item_id=OrderItemId(self._order_item_seq),
                order_id=order_id,
                menu_item_id=draft.menu_item_id,
                quantity=draft.quantity,
                unit_price=draft.unit_price,
            )
            self._order_items[item.order_item_id] = item

    def _delete_items(self, order_id: OrderId) -> None:
        stale = [key for key, item in self._order_items.items() if item.order_id == order_id]
        for key in stale:
            del self._order_items[key]

    def _join(self, order: Order) -> OrderWithItems:
        rows: list[OrderItemWithMenuItem] = []
        for key in sorted(self._order_items):
            item = self._order_items[key]
            if item.order_id != order.order_id:
                continue
            menu_item = self._menu_items.get(item.menu_item_id)
            if menu_item is None:
                raise DanglingMenuItemError(
                    f"order item {item.order_item_id} references missing menu item "
                    f"{item.menu_item_id}"
                )
            rows.append(OrderItemWithMenuItem(item=item, menu_item=menu_item))
        return OrderWithItems(order=order, items=rows)
