from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from barpos.api.middleware.request_id import get_request_id
from barpos.application.ports.repositories import DanglingMenuItemError, StoreUnavailableError
from barpos.application.use_cases.errors import (
    DuplicateOrderNumberError,
    EmptyOrderError,
    InvalidMenuItemError,
    InvalidOrderLineError,
    InvalidOrderListQueryError,
    InvalidOrderStatusFilterError,
    InvalidOrderTransitionError,
    MenuItemNotFoundError,
    OrderNotEditableError,
    OrderNotFoundError,
    OrderNumberUnavailableError,
    OrderValidationError,
)

logger = logging.getLogger(__name__)


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 409:
        code = "CONFLICT"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _dangling_menu_item_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.error("dangling_menu_item", extra={"error": str(exc)})
    return _error_response(
        status_code=500,
        code="DANGLING_MENU_ITEM",
        message=str(exc),
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": jsonable_encoder(validation_exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (EmptyOrderError, 400, "EMPTY_ORDER"),
        (InvalidOrderLineError, 400, "INVALID_ORDER_LINE"),
        (OrderValidationError, 400, "INVALID_ORDER"),
        (InvalidMenuItemError, 400, "INVALID_MENU_ITEM"),
        (InvalidOrderStatusFilterError, 400, "INVALID_ORDER_STATUS_FILTER"),
        (InvalidOrderListQueryError, 400, "INVALID_ORDER_QUERY"),
        (MenuItemNotFoundError, 404, "MENU_ITEM_NOT_FOUND"),
        (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (DuplicateOrderNumberError, 409, "DUPLICATE_ORDER_NUMBER"),
        (InvalidOrderTransitionError, 409, "INVALID_ORDER_TRANSITION"),
        (OrderNotEditableError, 409, "ORDER_NOT_EDITABLE"),
        (OrderNumberUnavailableError, 503, "ORDER_NUMBER_UNAVAILABLE"),
        (StoreUnavailableError, 503, "STORE_UNAVAILABLE"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(DanglingMenuItemError, _dangling_menu_item_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
