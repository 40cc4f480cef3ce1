from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query, Response, status

from barpos.api.dependencies import (
    delete_order_use_case,
    edit_order_use_case,
    export_history_use_case,
    get_order_use_case,
    list_orders_use_case,
    place_order_use_case,
    update_order_status_use_case,
)
from barpos.application.dto.requests import (
    EditOrderRequest,
    PlaceOrderRequest,
    UpdateOrderStatusRequest,
)
from barpos.application.dto.responses import OrderResponse, OrderWithItemsResponse
from barpos.application.use_cases.delete_order import DeleteOrder
from barpos.application.use_cases.edit_order import EditOrder
from barpos.application.use_cases.export_history import ExportOrderHistory
from barpos.application.use_cases.get_order import GetOrder, ListOrders
from barpos.application.use_cases.place_order import PlaceOrder
from barpos.application.use_cases.update_order_status import UpdateOrderStatus
from barpos.domain.common.ids import OrderId

router = APIRouter()


@router.get("/v1/orders", response_model=None)
def list_orders(
    with_items: bool = Query(default=False, alias="withItems"),
    order: Literal["asc", "desc"] = Query(default="asc"),
    limit: int | None = Query(default=None, ge=1, le=1000),
    use_case: ListOrders = Depends(list_orders_use_case),
) -> list[OrderResponse] | list[OrderWithItemsResponse]:
    return use_case.execute(with_items=with_items, newest_first=order == "desc", limit=limit)


# registered ahead of /v1/orders/{order_id} so "export" is never parsed as an id
@router.get("/v1/orders/export")
def export_orders(
    use_case: ExportOrderHistory = Depends(export_history_use_case),
) -> Response:
    export = use_case.execute()
    return Response(
        content=export.content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.get("/v1/orders/{order_id}", response_model=None)
def get_order(
    order_id: int,
    with_items: bool = Query(default=False, alias="withItems"),
    use_case: GetOrder = Depends(get_order_use_case),
) -> OrderResponse | OrderWithItemsResponse:
    return use_case.execute(OrderId(order_id), with_items=with_items)


@router.post(
    "/v1/orders",
    response_model=OrderWithItemsResponse,
    status_code=status.HTTP_201_CREATED,
)
def place_order(
    request_dto: PlaceOrderRequest,
    use_case: PlaceOrder = Depends(place_order_use_case),
) -> OrderWithItemsResponse:
    return use_case.execute(request_dto)


@router.patch("/v1/orders/{order_id}/status", response_model=OrderWithItemsResponse)
def update_order_status(
    order_id: int,
    request_dto: UpdateOrderStatusRequest,
    use_case: UpdateOrderStatus = Depends(update_order_status_use_case),
) -> OrderWithItemsResponse:
    return use_case.execute(OrderId(order_id), request_dto.status)


@router.patch("/v1/orders/{order_id}", response_model=OrderWithItemsResponse)
def edit_order(
    order_id: int,
    request_dto: EditOrderRequest,
    use_case: EditOrder = Depends(edit_order_use_case),
) -> OrderWithItemsResponse:
    return use_case.execute(OrderId(order_id), request_dto)


@router.delete("/v1/orders/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(
    order_id: int,
    use_case: DeleteOrder = Depends(delete_order_use_case),
) -> Response:
    use_case.execute(OrderId(order_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
