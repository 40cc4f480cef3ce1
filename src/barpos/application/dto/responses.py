from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class MenuItemResponse(BaseModel):
    id: int
    name: str
    price: int
    category: str
    pricingClass: str
    imageUrl: str | None = None


class OrderResponse(BaseModel):
    id: int
    orderNumber: str
    status: str
    totalAmount: int
    createdAt: datetime
    updatedAt: datetime


class OrderItemResponse(BaseModel):
    id: int
    orderId: int
    menuItemId: int
    quantity: int
    price: int
    menuItem: MenuItemResponse


class OrderWithItemsResponse(OrderResponse):
    items: list[OrderItemResponse] = Field(default_factory=list)


class PriceQuoteResponse(BaseModel):
    mode: str
    subtotal: int
    tax: int
    total: int
