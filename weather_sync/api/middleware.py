from __future__ import annotations

import time
import uuid

import structlog
from fastapi.responses import JSONResponse

log = structlog.get_logger(__name__)


class RequestIDMiddleware:
    """Tags every HTTP response with `x-request-id` and logs its completion.

    Exceptions escaping the app become a 500 `{"message": ...}` sent through the
    same wrapper, so error responses carry the header too.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        request_id = uuid.uuid4().hex
        scope.setdefault("state", {})
        scope["state"]["request_id"] = request_id

        start = time.perf_counter()
        status = {"code": 500, "started": False}

        async def send_wrapper(message):
            if message.get("type") == "http.response.start":
                status["code"] = message.get("status", 500)
                status["started"] = True
                headers = message.setdefault("headers", [])
                headers.append((b"x-request-id", request_id.encode()))
            await send(message)

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            try:
                await self.app(scope, receive, send_wrapper)
            except Exception as exc:
                log.exception("unhandled_error", path=scope.get("path", ""), request_id=request_id)
                if status["started"]:
                    raise
                response = JSONResponse(status_code=500, content={"message": str(exc)})
                await response(scope, receive, send_wrapper)
            finally:
                dur_ms = int((time.perf_counter() - start) * 1000)
                log.info(
                    "request_completed",
                    method=scope.get("method", ""),
                    path=scope.get("path", ""),
                    status=status["code"],
                    duration_ms=dur_ms,
                )
