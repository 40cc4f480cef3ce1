from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from barpos.domain.common.ids import MenuItemId
from barpos.domain.common.money import Currency, format_money, get_currency
from barpos.domain.menu.entities import MenuCategory, MenuItem, MenuItemDraft, PricingClass


def test_currency_invariants() -> None:
    with pytest.raises(ValueError):
        Currency(code="jpy", symbol="¥", minor_digits=0)
    with pytest.raises(ValueError):
        Currency(code="JP", symbol="¥", minor_digits=0)
    with pytest.raises(ValueError):
        get_currency("XXX")


def test_format_money_uses_minor_digits() -> None:
    assert format_money(1500, get_currency("JPY")) == "¥1,500"
    assert format_money(700, get_currency("JPY")) == "¥700"
    assert format_money(123456, get_currency("USD")) == "$1,234.56"
    assert format_money(5, get_currency("EUR")) == "€0.05"


def test_menu_item_name_must_be_non_empty() -> None:
    with pytest.raises(ValueError):
        MenuItem(item_id=MenuItemId(1), name="   ", price=100, category=MenuCategory.SAKE)


def test_menu_item_price_must_be_non_negative() -> None:
    with pytest.raises(ValueError):
        MenuItemDraft(name="梅酒 ロック", price=-1, category=MenuCategory.UMESHU)


@pytest.mark.parametrize("category", [c for c in MenuCategory if c is not MenuCategory.SOFT_DRINK])
def test_drink_categories_are_alcoholic(category: MenuCategory) -> None:
    assert category.pricing_class == PricingClass.ALCOHOLIC


def test_soft_drinks_have_soft_pricing_class() -> None:
    item = MenuItem.from_draft(
        MenuItemId(7),
        MenuItemDraft(name="ジンジャーエール", price=450, category=MenuCategory.SOFT_DRINK),
    )
    assert item.item_id == 7
    assert item.pricing_class == PricingClass.SOFT


def test_unknown_category_is_rejected() -> None:
    with pytest.raises(ValueError):
        MenuCategory("日本酒")
