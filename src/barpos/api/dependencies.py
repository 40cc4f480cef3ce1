from __future__ import annotations

from fastapi import Request

from barpos.application.order_numbers import OrderNumberAllocator
from barpos.application.ports.cache import CacheStore
from barpos.application.use_cases.delete_order import DeleteOrder
from barpos.application.use_cases.edit_order import EditOrder
from barpos.application.use_cases.export_history import ExportOrderHistory
from barpos.application.use_cases.get_order import GetOrder, ListOrders
from barpos.application.use_cases.menu_catalog import (
    CreateMenuItem,
    DeleteMenuItem,
    GetMenuItem,
    ListMenuItems,
    UpdateMenuItem,
)
from barpos.application.use_cases.place_order import PlaceOrder
from barpos.application.use_cases.quote_order import QuoteOrder
from barpos.application.use_cases.update_order_status import UpdateOrderStatus
from barpos.domain.pricing.strategies import PricingStrategy
from barpos.infrastructure.settings import Settings
from barpos.infrastructure.store import StoreHandle


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> StoreHandle:
    return request.app.state.store


def get_menu_cache(request: Request) -> CacheStore:
    return request.app.state.menu_cache


def get_pricing(request: Request) -> PricingStrategy:
    return request.app.state.pricing


def get_order_numbers(request: Request) -> OrderNumberAllocator:
    return request.app.state.order_numbers


def list_menu_items_use_case(request: Request) -> ListMenuItems:
    return ListMenuItems(
        repository=get_store(request).menu_repository,
        cache=get_menu_cache(request),
        ttl_seconds=get_settings(request).menu_cache_ttl_seconds,
    )


def get_menu_item_use_case(request: Request) -> GetMenuItem:
    return GetMenuItem(repository=get_store(request).menu_repository)


def create_menu_item_use_case(request: Request) -> CreateMenuItem:
    return CreateMenuItem(
        repository=get_store(request).menu_repository,
        cache=get_menu_cache(request),
    )


def update_menu_item_use_case(request: Request) -> UpdateMenuItem:
    return UpdateMenuItem(
        repository=get_store(request).menu_repository,
        cache=get_menu_cache(request),
    )


def delete_menu_item_use_case(request: Request) -> DeleteMenuItem:
    return DeleteMenuItem(
        repository=get_store(request).menu_repository,
        cache=get_menu_cache(request),
    )


def place_order_use_case(request: Request) -> PlaceOrder:
    store = get_store(request)
    return PlaceOrder(
        menu_repository=store.menu_repository,
        order_repository=store.order_repository,
        pricing=get_pricing(request),
        order_numbers=get_order_numbers(request),
        initial_status=get_settings(request).order_initial_status,
    )


def update_order_status_use_case(request: Request) -> UpdateOrderStatus:
    return UpdateOrderStatus(order_repository=get_store(request).order_repository)


def edit_order_use_case(request: Request) -> EditOrder:
    store = get_store(request)
    return EditOrder(
        menu_repository=store.menu_repository,
        order_repository=store.order_repository,
        pricing=get_pricing(request),
    )


def delete_order_use_case(request: Request) -> DeleteOrder:
    return DeleteOrder(order_repository=get_store(request).order_repository)


def get_order_use_case(request: Request) -> GetOrder:
    return GetOrder(order_repository=get_store(request).order_repository)


def list_orders_use_case(request: Request) -> ListOrders:
    return ListOrders(order_repository=get_store(request).order_repository)


def export_history_use_case(request: Request) -> ExportOrderHistory:
    return ExportOrderHistory(
        order_repository=get_store(request).order_repository,
        currency=get_settings(request).currency,
        display_timezone=get_settings(request).display_tzinfo,
    )


def quote_order_use_case(request: Request) -> QuoteOrder:
    return QuoteOrder(
        menu_repository=get_store(request).menu_repository,
        pricing=get_pricing(request),
    )
