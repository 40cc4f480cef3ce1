from __future__ import annotations

from typing import NewType

MenuItemId = NewType("MenuItemId", int)
OrderId = NewType("OrderId", int)
OrderItemId = NewType("OrderItemId", int)
