from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from barpos.api.dependencies import (
    create_menu_item_use_case,
    delete_menu_item_use_case,
    get_menu_item_use_case,
    list_menu_items_use_case,
    update_menu_item_use_case,
)
from barpos.application.dto.requests import CreateMenuItemRequest, UpdateMenuItemRequest
from barpos.application.dto.responses import MenuItemResponse
from barpos.application.use_cases.menu_catalog import (
    CreateMenuItem,
    DeleteMenuItem,
    GetMenuItem,
    ListMenuItems,
    UpdateMenuItem,
)
from barpos.domain.common.ids import MenuItemId

router = APIRouter()


@router.get("/v1/menu-items", response_model=list[MenuItemResponse])
def list_menu_items(
    use_case: ListMenuItems = Depends(list_menu_items_use_case),
) -> list[MenuItemResponse]:
    return use_case.execute()


@router.get("/v1/menu-items/{item_id}", response_model=MenuItemResponse)
def get_menu_item(
    item_id: int,
    use_case: GetMenuItem = Depends(get_menu_item_use_case),
) -> MenuItemResponse:
    return use_case.execute(MenuItemId(item_id))


@router.post(
    "/v1/menu-items",
    response_model=MenuItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_menu_item(
    request_dto: CreateMenuItemRequest,
    use_case: CreateMenuItem = Depends(create_menu_item_use_case),
) -> MenuItemResponse:
    return use_case.execute(request_dto)


@router.patch("/v1/menu-items/{item_id}", response_model=MenuItemResponse)
def update_menu_item(
    item_id: int,
    request_dto: UpdateMenuItemRequest,
    use_case: UpdateMenuItem = Depends(update_menu_item_use_case),
) -> MenuItemResponse:
    return use_case.execute(MenuItemId(item_id), request_dto)


@router.delete("/v1/menu-items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(
    item_id: int,
    use_case: DeleteMenuItem = Depends(delete_menu_item_use_case),
) -> Response:
    use_case.execute(MenuItemId(item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
