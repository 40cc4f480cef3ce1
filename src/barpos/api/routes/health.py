from __future__ import annotations

from fastapi import APIRouter, Request, Response, status

router = APIRouter()


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(request: Request, response: Response) -> dict[str, object]:
    store_ready = request.app.state.store.ping()
    redis_probe = request.app.state.redis_probe
    redis_ready = redis_probe() if redis_probe is not None else None

    if store_ready and redis_ready is not False:
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "unavailable",
        "checks": {"store": store_ready, "redis": redis_ready},
    }
