"""HTTP response model and its serialization to Starlette responses."""

import enum
import json
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel
from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from .etag import handle_etag
from .exceptions import (
    ERR_INCOMPLETE_RESPONSE,
    ResponseContractError,
    UnsupportedPayloadTypeError,
)


# Headers
CONTENT_TYPE_HEADER = "Content-Type"
CONTENT_TYPE_OPTIONS_HEADER = "X-Content-Type-Options"
CONTENT_TYPE_OPTIONS_NOSNIFF = "nosniff"

# Content types
CONTENT_APP_JSON = "application/json;charset=utf-8"
CONTENT_TEXT_PLAIN = "text/plain;charset=utf-8"
CONTENT_TEXT_HTML = "text/html;charset=utf-8"


class PayloadType(enum.Enum):
    """Shape of a response body."""

    EMPTY = "empty"
    JSON = "json"
    TEXT = "text"
    REDIRECT = "redirect"


class HttpResponse:
    """Holds the data of an HTTP response until ``write`` turns it into one.

    Instances are normally produced by the builders in
    ``lib.responses.builders`` rather than constructed directly.
    """

    def __init__(
        self,
        status_code: int,
        is_successful: bool = True,
        content_type: str = CONTENT_TEXT_PLAIN,
        payload: Any = None,
        payload_type: PayloadType = PayloadType.EMPTY,
    ):
        self._status_code = status_code
        self._is_successful = is_successful
        self._content_type = content_type
        self._payload = payload
        self._payload_type = payload_type
        self._headers: Dict[str, str] = {}
        self._etag = False

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def is_successful(self) -> bool:
        return self._is_successful

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def payload(self) -> Any:
        return self._payload

    @property
    def payload_type(self) -> PayloadType:
        return self._payload_type

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    @property
    def uses_etag(self) -> bool:
        return self._etag

    def with_headers(self, headers: Optional[Mapping[str, Any]]) -> "HttpResponse":
        """Attach additional headers to the response.

        Content-Type and the other headers the serializer controls are never
        overridden by these. Calling this again replaces the previous headers.
        Multi-valued mappings (e.g. Starlette ``Headers``) are joined with
        a space.
        """
        merged: Dict[str, str] = {}
        for key in (headers or {}).keys():
            if hasattr(headers, "getlist"):
                merged[key] = " ".join(headers.getlist(key))
            else:
                merged[key] = str(headers[key])
        self._headers = merged
        return self


def write(request: Optional[Request], response: HttpResponse) -> Response:
    """Serialize ``response`` into a Starlette response.

    Args:
        request: The request being answered; needed for the conditional
            cache check. May be None, in which case freshness is not checked.
        response: A finished response model

    Returns:
        Response ready to be sent by the transport

    Raises:
        ResponseContractError: If the response is incomplete or malformed
        UnsupportedPayloadTypeError: If the payload kind is unknown
        TypeError, ValueError: If a JSON payload cannot be encoded
    """
    if not isinstance(response, HttpResponse):
        raise ResponseContractError(ERR_INCOMPLETE_RESPONSE)

    headers = MutableHeaders()
    for key, value in response.headers.items():
        headers[key] = value
    headers[CONTENT_TYPE_HEADER] = response.content_type

    if not response.is_successful:
        return _write_error(response, headers)

    return _write_payload(request, response, headers)


def encode_json(payload: Any, canonical: bool = False) -> bytes:
    """Encode a JSON payload.

    The canonical form sorts mapping keys so that equal payloads always
    produce identical bytes, which the entity tag depends on.
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True)
    return json.dumps(
        payload,
        sort_keys=canonical,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")


def _write_error(response: HttpResponse, headers: MutableHeaders) -> Response:
    headers[CONTENT_TYPE_OPTIONS_HEADER] = CONTENT_TYPE_OPTIONS_NOSNIFF

    if response.payload_type == PayloadType.JSON:
        body = encode_json(response.payload)
    elif isinstance(response.payload, str) and response.payload:
        body = response.payload.encode("utf-8")
    else:
        raise ResponseContractError(ERR_INCOMPLETE_RESPONSE)

    return Response(content=body, status_code=response.status_code, headers=headers)


def _write_payload(
    request: Optional[Request],
    response: HttpResponse,
    headers: MutableHeaders,
) -> Response:
    if response.payload_type == PayloadType.REDIRECT:
        return _redirect(response, headers)

    if response.uses_etag:
        return _write_etag_payload(request, response, headers)

    return Response(
        content=_encode_body(response),
        status_code=response.status_code,
        headers=headers,
    )


def _redirect(response: HttpResponse, headers: MutableHeaders) -> Response:
    if not isinstance(response.payload, str) or not response.payload:
        raise ResponseContractError(ERR_INCOMPLETE_RESPONSE)

    return RedirectResponse(
        url=response.payload,
        status_code=response.status_code,
        headers=headers,
    )


def _write_etag_payload(
    request: Optional[Request],
    response: HttpResponse,
    headers: MutableHeaders,
) -> Response:
    if response.payload_type == PayloadType.EMPTY:
        return Response(status_code=response.status_code, headers=headers)

    body = _encode_body(response, canonical=True)
    not_modified = handle_etag(request, headers, body)
    if not_modified is not None:
        return not_modified

    return Response(content=body, status_code=response.status_code, headers=headers)


def _encode_body(response: HttpResponse, canonical: bool = False) -> bytes:
    if response.payload_type == PayloadType.TEXT:
        return response.payload.encode("utf-8")
    if response.payload_type == PayloadType.JSON:
        return encode_json(response.payload, canonical=canonical)
    if response.payload_type == PayloadType.EMPTY:
        return b""

    raise UnsupportedPayloadTypeError(f"unsupported payload type: {response.payload_type!r}")
