"""Entity tags and the conditional-request freshness check."""

import hashlib
import re
from email.utils import parsedate_to_datetime
from typing import List, Mapping, Optional

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import Response


ETAG_HEADER = "ETag"
CACHE_CONTROL_HEADER = "Cache-Control"
# max-age = 2 weeks
CACHE_CONTROL_VALUE = "max-age=1209600, private, no-cache"

_NO_CACHE_RE = re.compile(r"(?:^|,)\s*no-cache\s*(?:,|$)", re.IGNORECASE)


def generate_etag(body: bytes) -> str:
    """Build a weak validator from the exact response bytes."""
    return 'W/"%s"' % hashlib.sha1(body).hexdigest()


def handle_etag(
    request: Optional[Request],
    headers: MutableHeaders,
    body: bytes,
) -> Optional[Response]:
    """Set the caching headers and answer 304 if the client copy is fresh.

    Args:
        request: Incoming request, or None when there is nothing to compare
        headers: Response headers collected so far; updated in place
        body: Exact bytes that would be sent as the body

    Returns:
        A 304 response if the cached copy is still fresh, None otherwise
    """
    headers[ETAG_HEADER] = generate_etag(body)
    headers[CACHE_CONTROL_HEADER] = CACHE_CONTROL_VALUE

    if request is None:
        return None

    if is_fresh(request.headers, headers):
        return Response(status_code=304, headers=headers)
    return None


def is_fresh(request_headers: Mapping[str, str], response_headers: Mapping[str, str]) -> bool:
    """Check whether the client's cached representation is still usable.

    Both mappings must support case-insensitive lookups with lower case keys,
    as Starlette ``Headers`` do.
    """
    modified_since = request_headers.get("if-modified-since")
    none_match = request_headers.get("if-none-match")

    # unconditional request
    if not modified_since and not none_match:
        return False

    # the client explicitly asks for an end-to-end reload
    cache_control = request_headers.get("cache-control")
    if cache_control and _NO_CACHE_RE.search(cache_control):
        return False

    if none_match and none_match.strip() != "*":
        etag = response_headers.get("etag")
        if not etag:
            return False
        if not any(_weak_match(tag, etag) for tag in _parse_tokens(none_match)):
            return False

    if modified_since:
        last_modified = response_headers.get("last-modified")
        if not last_modified:
            return False
        try:
            if parsedate_to_datetime(last_modified) > parsedate_to_datetime(modified_since):
                return False
        except (TypeError, ValueError):
            return False

    return True


def _parse_tokens(value: str) -> List[str]:
    return [token.strip() for token in value.split(",") if token.strip()]


def _weak_match(a: str, b: str) -> bool:
    return _opaque_tag(a) == _opaque_tag(b)


def _opaque_tag(tag: str) -> str:
    return tag[2:] if tag.startswith("W/") else tag
