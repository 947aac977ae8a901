"""FastAPI application factory."""

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lib.common.url_builder import API_V1_PREFIX
from .api import register_routes
from .router import Router
from .middleware.request_context import RequestContextMiddleware


def create_app(service_instance, config) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: URLShortenerService instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Minimal URL shortening service",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
    )

    # Store instances in app state for access in handlers
    app.state.service = service_instance
    app.state.config = config

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        max_age=config.cors_max_age,
    )

    v1 = APIRouter()
    register_routes(Router(v1))
    app.include_router(v1, prefix=API_V1_PREFIX)

    return app
