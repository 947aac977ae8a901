"""URL building utilities for URL shortener."""


API_V1_PREFIX = "/api/v1"


def build_short_url(
    short_code: str,
    base_url: str,
    path_prefix: str = API_V1_PREFIX,
) -> str:
    """Build complete short URL.

    Args:
        short_code: The short code
        base_url: Base URL of the service (e.g., http://127.0.0.1:18080)
        path_prefix: Path the resolve route is mounted under

    Returns:
        Complete short URL, e.g. http://127.0.0.1:18080/api/v1/abc
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{short_code}"
    return f"{base}/{short_code}"
