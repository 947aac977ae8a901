"""Request context middleware."""

import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from lib.common.logging_config import get_logger


REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id and log its outcome."""

    def __init__(self, app, logger: logging.Logger = None):
        """Initialize request context middleware."""
        super().__init__(app)
        self.logger = logger or get_logger("url_shortener.web")

    async def dispatch(self, request: Request, call_next: Callable):
        """Assign the request id, then log status and duration."""
        start_time = time.perf_counter()

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        duration_ms = (time.perf_counter() - start_time) * 1000
        client_ip = request.client.host if request.client else "unknown"
        self.logger.info(
            f"{request.method} {request.url.path} from {client_ip} - "
            f"Status: {response.status_code} - Duration: {duration_ms:.2f}ms",
            extra={"request_id": request_id},
        )

        return response
