from __future__ import annotations

from dataclasses import dataclass

from barpos.domain.common.ids import MenuItemId
from barpos.domain.menu.entities import MenuItem
from barpos.domain.pricing.strategies import PriceQuote, PricingLine, PricingStrategy


@dataclass
class CartItem:
    menu_item: MenuItem
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    def to_pricing_line(self) -> PricingLine:
        return PricingLine(
            menu_item_id=self.menu_item.item_id,
            unit_price=self.menu_item.price,
            quantity=self.quantity,
            pricing_class=self.menu_item.pricing_class,
        )


class Cart:
    """Register-side selection of menu items, one entry per menu item id."""

    def __init__(self, strategy: PricingStrategy) -> None:
        self._strategy = strategy
        self._items: list[CartItem] = []

    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def unit_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def _find(self, menu_item_id: MenuItemId) -> CartItem | None:
        for item in self._items:
            if item.menu_item.item_id == menu_item_id:
                return item
        return None

    def add(self, menu_item: MenuItem) -> None:
        existing = self._find(menu_item.item_id)
        if existing is None:
            self._items.append(CartItem(menu_item=menu_item, quantity=1))
        else:
            existing.quantity += 1

    def remove(self, menu_item_id: MenuItemId) -> None:
        self._items = [item for item in self._items if item.menu_item.item_id != menu_item_id]

    def set_quantity(self, menu_item_id: MenuItemId, quantity: int) -> None:
        existing = self._find(menu_item_id)
        if existing is None:
            return
        if quantity <= 0:
            self.remove(menu_item_id)
            return
        existing.quantity = quantity

    def clear(self) -> None:
        self._items = []

    def pricing_lines(self) -> list[PricingLine]:
        return [item.to_pricing_line() for item in self._items]

    def order_lines(self) -> list[tuple[MenuItemId, int]]:
        return [(item.menu_item.item_id, item.quantity) for item in self._items]

    def quote(self) -> PriceQuote:
        return self._strategy.quote(self.pricing_lines())

    def subtotal(self) -> int:
        return self.quote().subtotal

    def tax(self) -> int:
        return self.quote().tax

    def total(self) -> int:
        return self.quote().total
