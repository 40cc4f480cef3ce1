from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from barpos.application.ports.repositories import (
    DanglingMenuItemError,
    OrderNumberConflictError,
    OrderStatusConflictError,
)
from barpos.domain.common.ids import MenuItemId, OrderId
from barpos.domain.menu.entities import MenuCategory, MenuItemDraft
from barpos.domain.order.entities import (
    OrderItemDraft,
    OrderStatus,
    create_order_draft,
)
from barpos.infrastructure.memory.store import InMemoryPosStore

NOW = datetime(2026, 10, 17, 18, 0, tzinfo=timezone.utc)


def _draft(order_number: str, *menu_item_ids: int):
    return create_order_draft(
        order_number=order_number,
        status=OrderStatus.IN_PROGRESS,
        items=[
            OrderItemDraft(menu_item_id=MenuItemId(item_id), quantity=1, unit_price=700)
            for item_id in menu_item_ids
        ],
        total_amount=700 * len(menu_item_ids),
        now=NOW,
    )


def _store() -> InMemoryPosStore:
    store = InMemoryPosStore()
    store.add_item(MenuItemDraft(name="梅酒 ロック", price=650, category=MenuCategory.UMESHU))
    store.add_item(MenuItemDraft(name="マティーニ", price=900, category=MenuCategory.COCKTAIL))
    return store


def test_ids_are_monotonic_and_never_reused() -> None:
    store = _store()
    first = store.add_order(_draft("#1", 1))
    store.delete_order(first.order.order_id)
    second = store.add_order(_draft("#2", 1))

    assert first.order.order_id == 1
    assert second.order.order_id == 2
    assert [row.item.order_item_id for row in second.items] == [2]


def test_menu_ids_are_not_reused_after_delete() -> None:
    store = _store()
    assert store.delete_item(MenuItemId(2))
    item = store.add_item(
        MenuItemDraft(name="モヒート", price=850, category=MenuCategory.COCKTAIL)
    )

    assert item.item_id == 3
    assert store.get_items([MenuItemId(1), MenuItemId(2), MenuItemId(3)]).keys() == {1, 3}


def test_duplicate_order_number_is_rejected() -> None:
    store = _store()
    store.add_order(_draft("#1000", 1))

    with pytest.raises(OrderNumberConflictError):
        store.add_order(_draft("#1000", 2))
    assert len(store.list_orders()) == 1


def test_join_returns_items_with_menu_items() -> None:
    store = _store()
    created = store.add_order(_draft("#1000", 1, 2))

    joined = store.get_order_with_items(created.order.order_id)

    assert [row.menu_item.name for row in joined.items] == ["梅酒 ロック", "マティーニ"]
    assert store.get_order_with_items(OrderId(99)) is None


def test_replace_swaps_items_and_keeps_identity() -> None:
    store = _store()
    created = store.add_order(_draft("#1000", 1))
    revised = created.order.revise(
        order_number="#1000",
        status=OrderStatus.IN_PROGRESS,
        total_amount=900,
        now=NOW + timedelta(minutes=1),
    )

    replaced = store.replace_order(revised, [OrderItemDraft(MenuItemId(2), 1, 900)])

    assert replaced.order.order_id == created.order.order_id
    assert [row.item.menu_item_id for row in replaced.items] == [2]
    assert len(store.list_orders_with_items()[0].items) == 1


def test_replace_rejects_number_of_another_order() -> None:
    store = _store()
    store.add_order(_draft("#1", 1))
    second = store.add_order(_draft("#2", 2))
    clashing = second.order.revise(
        order_number="#1",
        status=OrderStatus.IN_PROGRESS,
        total_amount=700,
        now=NOW,
    )

    with pytest.raises(OrderNumberConflictError):
        store.replace_order(clashing, [OrderItemDraft(MenuItemId(1), 1, 700)])
    assert [row.item.menu_item_id for row in store.get_order_with_items(OrderId(2)).items] == [2]


def test_update_status_and_delete_on_missing_order() -> None:
    store = _store()

    assert store.update_order_status(OrderId(1), OrderStatus.READY, NOW) is None
    assert store.delete_order(OrderId(1)) is False


def test_deleted_menu_item_surfaces_as_dangling_reference() -> None:
    store = _store()
    created = store.add_order(_draft("#1000", 1))
    store.delete_item(MenuItemId(1))

    with pytest.raises(DanglingMenuItemError):
        store.get_order_with_items(created.order.order_id)


def test_order_sequence_counts_up_from_start() -> None:
    store = InMemoryPosStore(order_number_start=1000)
    assert [store.next_order_sequence() for _ in range(3)] == [1000, 1001, 1002]


def test_replace_refuses_an_order_that_is_no_longer_editable() -> None:
    store = _store()
    created = store.add_order(_draft("#1000", 1))
    stale = created.order.revise(
        order_number="#1000",
        status=OrderStatus.IN_PROGRESS,
        total_amount=900,
        now=NOW + timedelta(minutes=1),
    )
    store.update_order_status(created.order.order_id, OrderStatus.READY, NOW)

    with pytest.raises(OrderStatusConflictError):
        store.replace_order(stale, [OrderItemDraft(MenuItemId(2), 1, 900)])

    current = store.get_order_with_items(created.order.order_id)
    assert current.order.status == OrderStatus.READY
    assert [row.item.menu_item_id for row in current.items] == [1]
