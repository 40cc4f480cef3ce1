from __future__ import annotations

import logging
import os
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from barpos.api.error_handling import register_exception_handlers
from barpos.api.middleware.request_id import RequestIDMiddleware
from barpos.api.routes.health import router as health_router
from barpos.api.routes.kitchen import router as kitchen_router
from barpos.api.routes.menu import router as menu_router
from barpos.api.routes.metrics import router as metrics_router
from barpos.api.routes.orders import router as orders_router
from barpos.api.routes.pricing import router as pricing_router
from barpos.application.order_numbers import build_order_number_allocator
from barpos.domain.pricing.strategies import build_pricing_strategy
from barpos.infrastructure.cache.redis_client import close_redis_clients
from barpos.infrastructure.observability.logging_config import configure_logging
from barpos.infrastructure.observability.otel import configure_otel
from barpos.infrastructure.settings import Settings
from barpos.infrastructure.store import open_menu_cache, open_store
from barpos.tools.seed import seed_menu

logger = logging.getLogger("barpos.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)


def _cors_allow_origins(app_env: str) -> list[str]:
    # Dev/test: unblock everything (no credentials allowed)
    if app_env in {"dev", "test"}:
        return ["*"]

    # Staging/prod: restrict to explicit allowlist
    default_value = "https://your-prod-domain.com"
    raw_value = os.getenv("CORS_ALLOW_ORIGINS", default_value)
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        path = request.url.path
        method = request.method
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            REQUEST_COUNT.labels(method=method, path=path, status_code="500").inc()
            REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
            logger.exception(
                "request_error",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": 500,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        REQUEST_COUNT.labels(method=method, path=path, status_code=str(response.status_code)).inc()
        REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
        logger.info(
            "request_complete",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    store = app.state.store
    if settings.seed_menu:
        added = seed_menu(store.menu_repository)
        if added:
            logger.info("menu_seeded", extra={"count": added})
    try:
        yield
    finally:
        store.close()
        if settings.redis_url is not None:
            close_redis_clients()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="Bar POS", version="0.1.0", lifespan=lifespan)
    store = open_store(settings)
    menu_cache, redis_probe = open_menu_cache(settings)
    app.state.settings = settings
    app.state.store = store
    app.state.menu_cache = menu_cache
    app.state.redis_probe = redis_probe
    app.state.pricing = build_pricing_strategy(settings.pricing)
    app.state.order_numbers = build_order_number_allocator(
        settings.order_number_strategy,
        store.order_repository,
    )

    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(menu_router)
    app.include_router(orders_router)
    app.include_router(kitchen_router)
    app.include_router(pricing_router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(settings.app_env),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Request-Id"],
    )

    configure_otel(app, settings)
    return app


app = create_app()
