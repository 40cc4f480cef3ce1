from __future__ import annotations

import re
from contextvars import ContextVar
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-Id"
MAX_REQUEST_ID_LENGTH = 64
_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]+")

_current_request_id: ContextVar[str | None] = ContextVar("barpos_request_id", default=None)


def get_request_id() -> str | None:
    """Id of the request being served, for log records and error envelopes."""
    return _current_request_id.get()


def accept_request_id(raw: str | None) -> str:
    """Keep a caller-supplied id only when it is short and header/log safe."""
    if raw:
        candidate = raw.strip()
        if len(candidate) <= MAX_REQUEST_ID_LENGTH and _SAFE_REQUEST_ID.fullmatch(candidate):
            return candidate
    return uuid4().hex


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = accept_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        token = _current_request_id.set(request_id)
        try:
            response = await call_next(request)
        finally:
            _current_request_id.reset(token)

        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        return response
