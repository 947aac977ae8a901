"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict, Any

from .store import ShortLinkStore
from .common.validators import is_valid_url
from .common.url_builder import build_short_url
from .common.logging_config import get_logger


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        store: ShortLinkStore,
        base_url: str,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize URL shortener service.

        Args:
            store: Short link store; the service is its only writer
            base_url: Externally visible base URL of the service
            logger: Optional logger
        """
        self.store = store
        self.base_url = base_url
        self.logger = logger or get_logger("url_shortener.service")

    def create_short_url(self, original_url: str) -> Dict[str, Any]:
        """Create a new short URL.

        Two calls with the same URL produce two different codes.

        Args:
            original_url: The original long URL

        Returns:
            Dictionary with short_code, short_url, original_url

        Raises:
            ValueError: If the URL is not a valid absolute URL. The message
                is safe to show to clients.
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise ValueError(f"Invalid URL - {_echo(original_url)} - {error}")

        short_code = self.store.put(original_url)
        short_url = build_short_url(short_code, self.base_url)

        self.logger.info(f"Shortened URL: {short_url} -> {original_url}")

        return {
            "short_code": short_code,
            "short_url": short_url,
            "original_url": original_url,
        }

    def get_original_url(self, short_code: str) -> Optional[str]:
        """Get the original URL for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            Original URL or None if not found
        """
        original_url = self.store.get(short_code)

        if original_url is None:
            self.logger.debug(f"Short code not found: {short_code}")
            return None

        self.logger.debug(f"Long URL found for short code {short_code}: {original_url}")
        return original_url

    def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics."""
        return {"total_links": len(self.store)}


MAX_ECHOED_URL_LENGTH = 100


def _echo(url: str) -> str:
    """Shorten a rejected URL before quoting it back to the client."""
    if len(url) <= MAX_ECHOED_URL_LENGTH:
        return url
    return url[:MAX_ECHOED_URL_LENGTH] + "..."
