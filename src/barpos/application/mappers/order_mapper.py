from __future__ import annotations

from barpos.application.dto.responses import (
    OrderItemResponse,
    OrderResponse,
    OrderWithItemsResponse,
    PriceQuoteResponse,
)
from barpos.application.mappers.menu_mapper import to_menu_item_response
from barpos.domain.order.entities import Order, OrderWithItems
from barpos.domain.pricing.strategies import PriceQuote, PricingMode


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=int(order.order_id),
        orderNumber=order.order_number,
        status=order.status.value,
        totalAmount=order.total_amount,
        createdAt=order.created_at,
        updatedAt=order.updated_at,
    )


def to_order_with_items_response(order_with_items: OrderWithItems) -> OrderWithItemsResponse:
    order = order_with_items.order
    return OrderWithItemsResponse(
        id=int(order.order_id),
        orderNumber=order.order_number,
        status=order.status.value,
        totalAmount=order.total_amount,
        createdAt=order.created_at,
        updatedAt=order.updated_at,
        items=[
            OrderItemResponse(
                id=int(row.item.order_item_id),
                orderId=int(row.item.order_id),
                menuItemId=int(row.item.menu_item_id),
                quantity=row.item.quantity,
                price=row.item.unit_price,
                menuItem=to_menu_item_response(row.menu_item),
            )
            for row in order_with_items.items
        ],
    )


def to_price_quote_response(mode: PricingMode, quote: PriceQuote) -> PriceQuoteResponse:
    return PriceQuoteResponse(
        mode=mode.value,
        subtotal=quote.subtotal,
        tax=quote.tax,
        total=quote.total,
    )
