from __future__ import annotations

from barpos.application.dto.responses import MenuItemResponse
from barpos.domain.menu.entities import MenuItem


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        id=int(item.item_id),
        name=item.name,
        price=item.price,
        category=item.category.value,
        pricingClass=item.pricing_class.value,
        imageUrl=item.image_url,
    )
