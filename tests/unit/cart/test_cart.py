from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from barpos.domain.cart.cart import Cart, CartItem
from barpos.domain.common.ids import MenuItemId
from barpos.domain.menu.entities import MenuCategory, MenuItem
from barpos.domain.pricing.strategies import FlatRateTiering, LineItemPricing

SAKE = MenuItem(item_id=MenuItemId(1), name="久保田 千寿", price=750, category=MenuCategory.SAKE)
MOJITO = MenuItem(item_id=MenuItemId(2), name="モヒート", price=850, category=MenuCategory.COCKTAIL)
OOLONG = MenuItem(
    item_id=MenuItemId(3),
    name="ウーロン茶",
    price=400,
    category=MenuCategory.SOFT_DRINK,
)


def test_add_increments_existing_entry() -> None:
    cart = Cart(FlatRateTiering())
    cart.add(SAKE)
    cart.add(MOJITO)
    cart.add(SAKE)

    assert [(item.menu_item.item_id, item.quantity) for item in cart.items] == [(1, 2), (2, 1)]
    assert cart.unit_count == 3
    assert cart.total() == 1500


def test_remove_and_set_quantity_on_absent_item_are_noops() -> None:
    cart = Cart(FlatRateTiering())
    cart.add(SAKE)

    cart.remove(MenuItemId(99))
    cart.set_quantity(MenuItemId(99), 4)

    assert cart.order_lines() == [(MenuItemId(1), 1)]


def test_set_quantity_to_zero_removes_entry() -> None:
    cart = Cart(FlatRateTiering())
    cart.add(SAKE)
    cart.add(MOJITO)

    cart.set_quantity(MenuItemId(1), 0)

    assert cart.order_lines() == [(MenuItemId(2), 1)]


def test_set_quantity_then_remove_is_idempotent() -> None:
    cart = Cart(FlatRateTiering())
    cart.add(SAKE)
    cart.set_quantity(MenuItemId(1), 5)
    assert cart.total() == 2700

    cart.remove(MenuItemId(1))
    cart.remove(MenuItemId(1))
    assert cart.is_empty
    assert cart.total() == 0


def test_clear_empties_the_cart() -> None:
    cart = Cart(FlatRateTiering())
    cart.add(SAKE)
    cart.add(OOLONG)
    cart.clear()

    assert cart.is_empty
    assert cart.items == ()


def test_cart_totals_follow_the_strategy() -> None:
    cart = Cart(LineItemPricing())
    cart.add(SAKE)
    cart.add(OOLONG)

    assert cart.subtotal() == 1150
    assert cart.tax() == 115
    assert cart.total() == 1265


def test_pricing_lines_carry_pricing_class() -> None:
    cart = Cart(FlatRateTiering())
    cart.add(OOLONG)

    (line,) = cart.pricing_lines()
    assert line.pricing_class == OOLONG.pricing_class
    assert line.unit_price == 400


def test_cart_item_requires_positive_quantity() -> None:
    with pytest.raises(ValueError):
        CartItem(menu_item=SAKE, quantity=0)
