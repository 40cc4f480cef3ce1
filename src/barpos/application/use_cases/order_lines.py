from __future__ import annotations

from dataclasses import dataclass

from barpos.application.dto.requests import OrderLineRequest
from barpos.application.ports.repositories import MenuRepository
from barpos.application.use_cases.errors import (
    EmptyOrderError,
    InvalidOrderLineError,
    MenuItemNotFoundError,
)
from barpos.domain.common.ids import MenuItemId
from barpos.domain.order.entities import OrderItemDraft
from barpos.domain.pricing.strategies import PricingLine


@dataclass(frozen=True)
class ResolvedLines:
    pricing_lines: list[PricingLine]
    item_drafts: list[OrderItemDraft]


def validate_order_lines(lines: list[OrderLineRequest]) -> None:
    if not lines:
        raise EmptyOrderError("order must contain at least one item")
    for index, line in enumerate(lines):
        if line.quantity < 1:
            raise InvalidOrderLineError(f"items[{index}].quantity must be >= 1")


def resolve_order_lines(
    lines: list[OrderLineRequest],
    menu_repository: MenuRepository,
) -> ResolvedLines:
    """Validate request lines and join them with the catalog.

    Nothing is dropped: an unknown menu item id fails the whole request.
    """
    validate_order_lines(lines)

    requested_ids = list(dict.fromkeys(MenuItemId(line.menu_item_id) for line in lines))
    menu_items = menu_repository.get_items(requested_ids)
    missing = [int(item_id) for item_id in requested_ids if item_id not in menu_items]
    if missing:
        raise MenuItemNotFoundError(
            f"menu items not found: {', '.join(str(item_id) for item_id in missing)}",
            missing_ids=missing,
        )

    pricing_lines: list[PricingLine] = []
    item_drafts: list[OrderItemDraft] = []
    for line in lines:
        menu_item = menu_items[MenuItemId(line.menu_item_id)]
        pricing_lines.append(
            PricingLine(
                menu_item_id=menu_item.item_id,
                unit_price=menu_item.price,
                quantity=line.quantity,
                pricing_class=menu_item.pricing_class,
            )
        )
        item_drafts.append(
            OrderItemDraft(
                menu_item_id=menu_item.item_id,
                quantity=line.quantity,
                unit_price=menu_item.price,
            )
        )
    return ResolvedLines(pricing_lines=pricing_lines, item_drafts=item_drafts)
