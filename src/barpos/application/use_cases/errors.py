from __future__ import annotations


class OrderValidationError(Exception):
    pass


class EmptyOrderError(OrderValidationError):
    pass


class InvalidOrderLineError(OrderValidationError):
    pass


class InvalidMenuItemError(Exception):
    pass


class InvalidOrderStatusFilterError(Exception):
    pass


class InvalidOrderListQueryError(Exception):
    pass


class MenuItemNotFoundError(Exception):
    def __init__(self, message: str, missing_ids: list[int] | None = None) -> None:
        super().__init__(message)
        self.details = {"menuItemIds": missing_ids} if missing_ids else None


class OrderNotFoundError(Exception):
    pass


class DuplicateOrderNumberError(Exception):
    pass


class InvalidOrderTransitionError(Exception):
    pass


class OrderNotEditableError(Exception):
    pass


class OrderNumberUnavailableError(Exception):
    pass
