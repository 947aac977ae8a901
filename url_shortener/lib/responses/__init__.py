"""Structured HTTP responses: builders, serialization and entity tags."""

from .builders import (
    PartialFail,
    PartialOK,
    PartialRedirect,
    PartialSuccess,
    accepted,
    bad_request,
    conflict,
    created,
    custom_error,
    forbidden,
    gone,
    internal_server_error,
    locked,
    method_not_allowed,
    no_content,
    not_acceptable,
    not_found,
    not_implemented,
    not_modified,
    ok,
    payment_required,
    precondition_failed,
    redirect,
    request_entity_too_large,
    service_unavailable,
    unauthorized,
)
from .etag import generate_etag, is_fresh
from .exceptions import ResponseContractError, UnsupportedPayloadTypeError
from .response import HttpResponse, PayloadType, write

__all__ = [
    "HttpResponse",
    "PayloadType",
    "PartialFail",
    "PartialOK",
    "PartialRedirect",
    "PartialSuccess",
    "ResponseContractError",
    "UnsupportedPayloadTypeError",
    "write",
    "generate_etag",
    "is_fresh",
    "ok",
    "created",
    "accepted",
    "no_content",
    "not_modified",
    "redirect",
    "bad_request",
    "unauthorized",
    "payment_required",
    "forbidden",
    "not_found",
    "method_not_allowed",
    "not_acceptable",
    "conflict",
    "gone",
    "precondition_failed",
    "request_entity_too_large",
    "locked",
    "internal_server_error",
    "not_implemented",
    "service_unavailable",
    "custom_error",
]
