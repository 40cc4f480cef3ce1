from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from barpos.application.order_numbers import SequentialOrderNumbers
from barpos.application.use_cases.checkout_cart import CheckoutCart
from barpos.application.use_cases.errors import MenuItemNotFoundError
from barpos.application.use_cases.place_order import PlaceOrder
from barpos.domain.cart.cart import Cart
from barpos.domain.common.ids import MenuItemId
from barpos.domain.menu.entities import MenuCategory, MenuItem, MenuItemDraft
from barpos.domain.pricing.strategies import FlatRateTiering
from barpos.infrastructure.memory.store import InMemoryPosStore

FIXED_NOW = datetime(2026, 10, 17, 20, 30, tzinfo=timezone.utc)


def _checkout(store: InMemoryPosStore) -> CheckoutCart:
    return CheckoutCart(
        PlaceOrder(
            menu_repository=store,
            order_repository=store,
            pricing=FlatRateTiering(),
            order_numbers=SequentialOrderNumbers(store),
            clock=lambda: FIXED_NOW,
        )
    )


def test_empty_cart_places_nothing() -> None:
    store = InMemoryPosStore()

    assert _checkout(store).execute(Cart(FlatRateTiering())) is None
    assert store.list_orders() == []


def test_checkout_places_order_and_clears_cart() -> None:
    store = InMemoryPosStore()
    sake = store.add_item(
        MenuItemDraft(name="黒龍 純米吟醸", price=850, category=MenuCategory.SAKE)
    )
    cart = Cart(FlatRateTiering())
    cart.add(sake)
    cart.add(sake)

    order = _checkout(store).execute(cart)

    assert order is not None
    assert order.orderNumber == "#1000"
    assert order.totalAmount == 1200
    assert [(item.menuItemId, item.quantity) for item in order.items] == [(sake.item_id, 2)]
    assert cart.is_empty


def test_failed_checkout_keeps_cart() -> None:
    store = InMemoryPosStore()
    ghost = MenuItem(
        item_id=MenuItemId(42),
        name="幻の酒",
        price=5000,
        category=MenuCategory.SAKE,
    )
    cart = Cart(FlatRateTiering())
    cart.add(ghost)

    with pytest.raises(MenuItemNotFoundError):
        _checkout(store).execute(cart)

    assert cart.unit_count == 1
    assert store.list_orders() == []
