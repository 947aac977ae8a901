"""Common utilities for URL shortener."""

from .validators import is_valid_url
from .url_builder import API_V1_PREFIX, build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "API_V1_PREFIX",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
