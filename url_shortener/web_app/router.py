"""Route registration and the per-request dispatch wrapper."""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import APIRouter, Request
from starlette.responses import Response

from lib.common.logging_config import get_logger
from lib.responses import (
    HttpResponse,
    ResponseContractError,
    internal_server_error,
    write,
)


RouteHandler = Callable[[Request], Awaitable[HttpResponse]]

GENERIC_SERVER_ERROR = "Internal Server Error"
INCONSISTENT_PAYLOAD = "error response did not hold the expected payload"


def request_fields(request: Request) -> Dict[str, Any]:
    """Fields identifying a request in log records."""
    return {
        "request_id": getattr(request.state, "request_id", None),
        "method": request.method,
        "path": request.url.path,
    }


class Router:
    """Registers handlers that return ``HttpResponse`` values.

    Every handler is wrapped so that it runs exactly once per request,
    failures are turned into a generic 500, the response is written back
    and failed responses are logged.
    """

    def __init__(self, api_router: APIRouter, logger: Optional[logging.Logger] = None):
        self.api_router = api_router
        self.logger = logger or get_logger("url_shortener.router")

    def handle_func(self, method: str, path: str, handler: RouteHandler) -> None:
        """Register ``handler`` for ``method`` requests on ``path``."""
        self.logger.debug(f"Registering handler: {method} {path}")
        self.api_router.add_api_route(
            path,
            self.wrap(handler),
            methods=[method],
            name=getattr(handler, "__name__", None),
        )

    def wrap(self, handler: RouteHandler) -> Callable[[Request], Awaitable[Response]]:
        """Build the endpoint that dispatches a request to ``handler``."""

        async def endpoint(request: Request):
            fields = request_fields(request)
            self.logger.debug(f"Dispatching {request.method} {request.url.path}", extra=fields)

            try:
                resp = await handler(request)
                if not isinstance(resp, HttpResponse):
                    raise ResponseContractError(
                        f"handler returned {type(resp).__name__} instead of HttpResponse"
                    )
            except ResponseContractError:
                self.logger.critical("Response contract violation in route handler", exc_info=True, extra=fields)
                resp = internal_server_error().from_trusted_message(GENERIC_SERVER_ERROR)
            except Exception:
                self.logger.critical("Unhandled exception in route handler", exc_info=True, extra=fields)
                resp = internal_server_error().from_trusted_message(GENERIC_SERVER_ERROR)

            try:
                response = write(request, resp)
            except Exception as e:
                self.logger.error(f"Failed to write response: {e}", exc_info=True, extra=fields)
                response = Response(status_code=500)

            if not resp.is_successful:
                self._log_response(resp, fields)

            return response

        endpoint.__name__ = getattr(handler, "__name__", "endpoint")
        return endpoint

    def _log_response(self, resp: HttpResponse, fields: Dict[str, Any]) -> None:
        message = resp.payload
        if not isinstance(message, str) or not message:
            self.logger.error(INCONSISTENT_PAYLOAD, extra=fields)
            return

        if resp.status_code >= 500:
            self.logger.error(message, extra=fields)
            return

        # 4xx responses
        self.logger.warning(message, extra=fields)
