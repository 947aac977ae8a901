"""Validation utilities for URL shortener."""

from urllib.parse import urlparse
from typing import Tuple


MAX_URL_LENGTH = 2048


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate an absolute URL.

    Any scheme is accepted as long as both scheme and host are present.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        # unbalanced IPv6 brackets raise ValueError
        result = urlparse(url)
        host = result.hostname
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if not result.scheme or not host:
        return False, "URL is missing scheme or host"

    return True, ""
