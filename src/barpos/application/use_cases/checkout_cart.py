from __future__ import annotations

from barpos.application.dto.requests import OrderLineRequest, PlaceOrderRequest
from barpos.application.dto.responses import OrderWithItemsResponse
from barpos.application.use_cases.place_order import PlaceOrder
from barpos.domain.cart.cart import Cart


class CheckoutCart:
    """Turn a register cart into an order.

    An empty cart places nothing and returns None. The cart is cleared only
    after the order has been stored; on any failure it is left as it was so
    the operator can retry.
    """

    def __init__(self, place_order: PlaceOrder) -> None:
        self._place_order = place_order

    def execute(self, cart: Cart, order_number: str | None = None) -> OrderWithItemsResponse | None:
        if cart.is_empty:
            return None
        request_dto = PlaceOrderRequest(
            order_number=order_number,
            items=[
                OrderLineRequest(menu_item_id=int(menu_item_id), quantity=quantity)
                for menu_item_id, quantity in cart.order_lines()
            ],
        )
        order = self._place_order.execute(request_dto)
        cart.clear()
        return order
