"""Core business logic for URL shortener."""

from .shortcode import ShortCodeGenerator
from .store import ShortLinkStore, InMemoryShortLinkStore, ShortCodeCollisionError
from .service import URLShortenerService

__all__ = [
    "ShortCodeGenerator",
    "ShortLinkStore",
    "InMemoryShortLinkStore",
    "ShortCodeCollisionError",
    "URLShortenerService",
]
