"""API route handlers.

Each handler takes the request and returns an ``HttpResponse``; the
``Router`` takes care of writing it and of failures.
"""

from fastapi import Request
from starlette.exceptions import HTTPException

from lib.responses import HttpResponse, bad_request, custom_error, not_found, ok, redirect
from ..router import Router
from .schemas import HealthResponse, ShortenResponse, StatisticsResponse


async def shorten_handler(request: Request) -> HttpResponse:
    """POST /shorten - create a short link for the ``url`` form value."""
    service = request.app.state.service

    try:
        form = await request.form()
    except HTTPException as e:
        # parser detail may quote raw body bytes
        return custom_error(e.status_code).from_trusted_message("Malformed form body")

    long_url = form.get("url") or request.query_params.get("url")
    # uploaded files come back as UploadFile, only a text field is a URL
    if not isinstance(long_url, str) or not long_url:
        return bad_request().from_trusted_message("Missing URL parameter")

    try:
        result = service.create_short_url(long_url)
    except ValueError as e:
        return bad_request().from_trusted_error(e)

    return ok().with_json(ShortenResponse(short_url=result["short_url"]))


async def redirect_handler(request: Request) -> HttpResponse:
    """GET /{short_code} - redirect to the stored target."""
    service = request.app.state.service

    short_code = request.path_params.get("short_code")
    if not short_code:
        return bad_request().from_trusted_message("Short URL not found in request")

    long_url = service.get_original_url(short_code)
    if long_url is None:
        return not_found().from_trusted_message(f"Short URL not found - {short_code}")

    return redirect().temporary(long_url)


async def health_handler(request: Request) -> HttpResponse:
    """GET /health - liveness probe."""
    return ok().with_json(HealthResponse(status="healthy"))


async def statistics_handler(request: Request) -> HttpResponse:
    """GET /stats - service statistics, served with an entity tag."""
    stats = request.app.state.service.get_statistics()
    return ok().etag().with_json(StatisticsResponse(**stats))


def register_routes(router: Router) -> None:
    """Register the v1 API handlers.

    Fixed paths go first so ``/{short_code}`` does not shadow them.
    """
    router.handle_func("GET", "/health", health_handler)
    router.handle_func("GET", "/stats", statistics_handler)
    router.handle_func("POST", "/shorten", shorten_handler)
    router.handle_func("GET", "/{short_code}", redirect_handler)
