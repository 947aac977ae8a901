"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

from config import Config
from lib.service import URLShortenerService
from lib.shortcode import ShortCodeGenerator
from lib.store import InMemoryShortLinkStore
from lib.common.logging_config import setup_logging
from web_app import create_app


BASE_URL = "http://testserver"


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(num_bytes=8)


@pytest.fixture
def store(short_code_generator):
    """Create an empty in-memory store."""
    return InMemoryShortLinkStore(generator=short_code_generator)


@pytest.fixture
def service(store, logger):
    """Create service instance."""
    return URLShortenerService(store=store, base_url=BASE_URL, logger=logger)


@pytest.fixture
def config():
    """Create test configuration."""
    return Config(base_url=BASE_URL)


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        yield ac


@pytest.fixture
def make_request():
    """Build a bare Starlette request with the given headers."""

    def _make(headers=None, method="GET", path="/"):
        raw = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
        scope = {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": b"",
            "headers": raw,
        }
        return Request(scope)

    return _make


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/page",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456?tab=votes#answer",
    ]
