"""Request logging middleware.

Logs every HTTP request with method, path (plus query string), status code,
latency and a short request ID. The request_id is stored on request.state
so the error handlers can echo it in the error body, and returned to the
caller in the X-Request-ID header.

Log format:
    INFO [GET] /api/foods/restaurant/3?q=taco → 200 (4ms) req_a1b2c3d4e5f6
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("pb.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.request_id = f"req_{uuid.uuid4().hex[:12]}"

        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers["X-Request-ID"] = request.state.request_id
        logger.info(
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
            request.state.request_id,
        )
        return response
