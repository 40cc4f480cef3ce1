from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from barpos.api.dependencies import list_orders_use_case
from barpos.application.dto.responses import OrderWithItemsResponse
from barpos.application.use_cases.get_order import ListOrders

router = APIRouter()


@router.get("/v1/kitchen/orders", response_model=list[OrderWithItemsResponse])
def kitchen_orders(
    status: str = Query(default="all"),
    use_case: ListOrders = Depends(list_orders_use_case),
) -> list[OrderWithItemsResponse]:
    return use_case.execute(with_items=True, status=status)
