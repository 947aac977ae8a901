"""Builders for HttpResponse values.

A response is built in a fixed order: pick the status, then pick the
payload. Success statuses hand back a ``PartialSuccess`` (choose
``with_json`` or ``with_text``), failure statuses hand back a
``PartialFail`` (choose ``from_trusted_error``, ``from_trusted_message`` or
``with_json``). Only the final step yields an ``HttpResponse``, so an
unfinished response cannot be written by accident.

Example:
    >>> ok().with_json({"shortUrl": "http://127.0.0.1:18080/api/v1/abc"})
    >>> not_found().from_trusted_message("Short URL not found - abc")
    >>> redirect().temporary("https://example.com/page")
"""

from typing import Any, Mapping, Optional

from .exceptions import (
    ERR_EMPTY_MESSAGE,
    ERR_NIL_ERROR,
    ERR_NIL_JSON_PAYLOAD,
    ResponseContractError,
)
from .response import (
    CONTENT_APP_JSON,
    CONTENT_TEXT_HTML,
    CONTENT_TEXT_PLAIN,
    HttpResponse,
    PayloadType,
)


def _new_response(status_code: int) -> HttpResponse:
    return HttpResponse(status_code, is_successful=True)


def _new_error_response(status_code: int) -> HttpResponse:
    return HttpResponse(status_code, is_successful=False)


def _set_json(response: HttpResponse, payload: Any) -> HttpResponse:
    if payload is None:
        raise ResponseContractError(ERR_NIL_JSON_PAYLOAD)

    response._payload = payload
    response._payload_type = PayloadType.JSON
    response._content_type = CONTENT_APP_JSON
    return response


class PartialSuccess:
    """A success status waiting for its payload."""

    def __init__(self, response: HttpResponse):
        self._response = response

    def with_json(self, payload: Any) -> HttpResponse:
        """Serialize ``payload`` as JSON. Raises ResponseContractError if it is None."""
        return _set_json(self._response, payload)

    def with_text(self, text: str) -> HttpResponse:
        self._response._payload = text
        self._response._payload_type = PayloadType.TEXT
        self._response._content_type = CONTENT_TEXT_PLAIN
        return self._response

    def etag(self) -> "PartialSuccess":
        """Opt the response into the conditional-cache flow."""
        self._response._etag = True
        return self


class PartialOK(PartialSuccess):
    """200 OK, which may also be sent with headers only."""

    def info(
        self,
        content_type: str = "",
        headers: Optional[Mapping[str, str]] = None,
    ) -> HttpResponse:
        """Informational response carrying only headers (e.g. for HEAD requests)."""
        if content_type:
            self._response._content_type = content_type
        return self._response.with_headers(headers)


class PartialFail:
    """A failure status waiting for a client-safe payload."""

    def __init__(self, response: HttpResponse):
        self._response = response

    def from_trusted_error(self, err: Optional[BaseException]) -> HttpResponse:
        """Use the error text as the client message.

        The text is shown to the client, so it must NOT contain internal
        information.
        """
        if err is None:
            raise ResponseContractError(ERR_NIL_ERROR)

        message = str(err)
        if not message:
            raise ResponseContractError(ERR_EMPTY_MESSAGE)

        self._response._payload = message
        self._response._payload_type = PayloadType.TEXT
        return self._response

    def from_trusted_message(self, public_message: str) -> HttpResponse:
        """Use ``public_message`` as the client message. It must not be empty."""
        if not public_message:
            raise ResponseContractError(ERR_EMPTY_MESSAGE)

        self._response._payload = public_message
        self._response._payload_type = PayloadType.TEXT
        return self._response

    def with_json(self, payload: Any) -> HttpResponse:
        return _set_json(self._response, payload)


class PartialRedirect:
    """A redirect waiting for its target and flavour."""

    def __init__(self, response: HttpResponse):
        self._response = response

    def _to(self, status_code: int, url: str) -> HttpResponse:
        self._response._status_code = status_code
        self._response._payload = url
        self._response._content_type = CONTENT_TEXT_HTML
        return self._response

    def moved_permanently(self, url: str) -> HttpResponse:
        return self._to(301, url)

    def found(self, url: str) -> HttpResponse:
        return self._to(302, url)

    def temporary(self, url: str) -> HttpResponse:
        return self._to(307, url)

    def permanent(self, url: str) -> HttpResponse:
        return self._to(308, url)


# region 2xx

def ok() -> PartialOK:
    """200. Choose the payload next; use no_content() for empty payloads."""
    return PartialOK(_new_response(200))


def created() -> PartialSuccess:
    return PartialSuccess(_new_response(201))


def accepted() -> PartialSuccess:
    return PartialSuccess(_new_response(202))


def no_content() -> HttpResponse:
    return _new_response(204)

# endregion 2xx


# region 3xx

def not_modified() -> HttpResponse:
    return _new_response(304)


def redirect() -> PartialRedirect:
    return PartialRedirect(
        HttpResponse(302, is_successful=True, payload_type=PayloadType.REDIRECT)
    )

# endregion 3xx


# region 4xx

def bad_request() -> PartialFail:
    return PartialFail(_new_error_response(400))


def unauthorized() -> PartialFail:
    return PartialFail(_new_error_response(401))


def payment_required() -> PartialFail:
    return PartialFail(_new_error_response(402))


def forbidden() -> PartialFail:
    return PartialFail(_new_error_response(403))


def not_found() -> PartialFail:
    return PartialFail(_new_error_response(404))


def method_not_allowed() -> PartialFail:
    return PartialFail(_new_error_response(405))


def not_acceptable() -> PartialFail:
    return PartialFail(_new_error_response(406))


def conflict() -> PartialFail:
    return PartialFail(_new_error_response(409))


def gone() -> PartialFail:
    return PartialFail(_new_error_response(410))


def precondition_failed() -> PartialFail:
    return PartialFail(_new_error_response(412))


def request_entity_too_large() -> PartialFail:
    return PartialFail(_new_error_response(413))


def locked() -> PartialFail:
    return PartialFail(_new_error_response(423))

# endregion 4xx


# region 5xx

def internal_server_error() -> PartialFail:
    return PartialFail(_new_error_response(500))


def not_implemented() -> PartialFail:
    return PartialFail(_new_error_response(501))


def service_unavailable() -> PartialFail:
    return PartialFail(_new_error_response(503))

# endregion 5xx


def custom_error(status: int) -> PartialFail:
    """Failure with an arbitrary status code.

    Meant for proxying upstream responses, not for general use. The status
    must be in [400, 599]; anything else becomes 500.
    """
    if status < 400 or status > 599:
        status = 500
    return PartialFail(_new_error_response(status))
