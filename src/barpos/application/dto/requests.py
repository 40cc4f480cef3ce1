from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from barpos.domain.menu.entities import MenuCategory
from barpos.domain.order.entities import OrderStatus


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class CreateMenuItemRequest(CamelBaseModel):
    name: str
    price: int
    category: MenuCategory
    image_url: str | None = None


class UpdateMenuItemRequest(CamelBaseModel):
    name: str | None = None
    price: int | None = None
    category: MenuCategory | None = None
    image_url: str | None = None


class OrderLineRequest(CamelBaseModel):
    menu_item_id: int
    quantity: int


class PlaceOrderRequest(CamelBaseModel):
    order_number: str | None = None
    items: list[OrderLineRequest] = Field(default_factory=list)


class QuoteRequest(CamelBaseModel):
    items: list[OrderLineRequest] = Field(default_factory=list)


class UpdateOrderStatusRequest(CamelBaseModel):
    status: OrderStatus


class EditOrderRequest(CamelBaseModel):
    order_number: str
    status: OrderStatus
    items: list[OrderLineRequest] = Field(default_factory=list)
