"""Tests for the response builders and their serialization."""

import hashlib

import pytest
from pydantic import BaseModel, Field
from starlette.datastructures import Headers

from lib.responses import (
    HttpResponse,
    PayloadType,
    ResponseContractError,
    UnsupportedPayloadTypeError,
    bad_request,
    created,
    custom_error,
    internal_server_error,
    no_content,
    not_found,
    not_modified,
    ok,
    redirect,
    write,
)


class Link(BaseModel):
    short_url: str = Field(..., alias="shortUrl")


class TestBuilders:
    """Test the builder grammar and its contract checks."""

    def test_ok_with_json(self):
        resp = ok().with_json({"shortUrl": "http://testserver/api/v1/abc"})

        assert resp.status_code == 200
        assert resp.is_successful
        assert resp.payload_type == PayloadType.JSON
        assert resp.content_type == "application/json;charset=utf-8"

    def test_created_with_text(self):
        resp = created().with_text("done")

        assert resp.status_code == 201
        assert resp.payload == "done"
        assert resp.payload_type == PayloadType.TEXT

    def test_with_json_none_is_contract_violation(self):
        with pytest.raises(ResponseContractError, match="json payload cannot be None"):
            ok().with_json(None)

        with pytest.raises(ResponseContractError):
            bad_request().with_json(None)

    def test_empty_json_containers_are_allowed(self):
        assert ok().with_json({}).payload == {}
        assert ok().with_json([]).payload == []

    def test_trusted_message_required(self):
        with pytest.raises(ResponseContractError, match="message cannot be empty"):
            bad_request().from_trusted_message("")

    def test_trusted_error_required(self):
        with pytest.raises(ResponseContractError, match="error cannot be None"):
            not_found().from_trusted_error(None)

        with pytest.raises(ResponseContractError, match="message cannot be empty"):
            not_found().from_trusted_error(ValueError(""))

    def test_trusted_error_uses_error_text(self):
        resp = bad_request().from_trusted_error(ValueError("Invalid URL - x"))

        assert resp.status_code == 400
        assert not resp.is_successful
        assert resp.payload == "Invalid URL - x"

    @pytest.mark.parametrize("status,expected", [
        (400, 400),
        (418, 418),
        (599, 599),
        (399, 500),
        (200, 500),
        (600, 500),
        (-1, 500),
    ])
    def test_custom_error_is_clamped(self, status, expected):
        assert custom_error(status).from_trusted_message("nope").status_code == expected

    @pytest.mark.parametrize("flavour,status", [
        ("moved_permanently", 301),
        ("found", 302),
        ("temporary", 307),
        ("permanent", 308),
    ])
    def test_redirect_flavours(self, flavour, status):
        resp = getattr(redirect(), flavour)("https://example.com/page")

        assert resp.status_code == status
        assert resp.payload == "https://example.com/page"
        assert resp.payload_type == PayloadType.REDIRECT

    def test_headers_last_call_wins(self):
        resp = ok().with_text("x").with_headers({"X-First": "1"}).with_headers({"X-Second": "2"})

        assert resp.headers == {"X-Second": "2"}

    def test_multi_valued_headers_are_joined(self):
        multi = Headers(raw=[(b"x-multi", b"a"), (b"x-multi", b"b")])

        resp = ok().with_text("x").with_headers(multi)

        assert resp.headers == {"x-multi": "a b"}


class TestWrite:
    """Test serialization of finished responses."""

    def test_text(self, make_request):
        response = write(make_request(), ok().with_text("hello"))

        assert response.status_code == 200
        assert response.body == b"hello"
        assert response.headers["content-type"] == "text/plain;charset=utf-8"
        assert "etag" not in response.headers

    def test_json(self, make_request):
        response = write(make_request(), ok().with_json({"b": 1, "a": [1, 2]}))

        assert response.body == b'{"b":1,"a":[1,2]}'
        assert response.headers["content-type"] == "application/json;charset=utf-8"

    def test_pydantic_json_uses_aliases(self, make_request):
        response = write(make_request(), ok().with_json(Link(shortUrl="http://testserver/api/v1/abc")))

        assert response.body == b'{"shortUrl":"http://testserver/api/v1/abc"}'

    def test_no_content(self, make_request):
        response = write(make_request(), no_content())

        assert response.status_code == 204
        assert response.body == b""

    def test_not_modified(self, make_request):
        response = write(make_request(), not_modified())

        assert response.status_code == 304
        assert response.body == b""

    def test_info_only_carries_headers(self, make_request):
        resp = ok().info("application/pdf", {"Content-Disposition": "inline"})

        response = write(make_request(method="HEAD"), resp)

        assert response.status_code == 200
        assert response.body == b""
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == "inline"

    def test_redirect(self, make_request):
        response = write(make_request(), redirect().temporary("https://example.com/page"))

        assert response.status_code == 307
        assert response.headers["location"] == "https://example.com/page"

    def test_redirect_ignores_etag_logic(self, make_request):
        resp = redirect().found("https://example.com/page")
        resp._etag = True

        response = write(make_request(), resp)

        assert response.status_code == 302
        assert "etag" not in response.headers

    def test_failure_text(self, make_request):
        response = write(make_request(), not_found().from_trusted_message("Short URL not found - abc"))

        assert response.status_code == 404
        assert response.body == b"Short URL not found - abc"
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["content-type"] == "text/plain;charset=utf-8"

    def test_failure_json(self, make_request):
        response = write(make_request(), internal_server_error().with_json({"error": "unavailable"}))

        assert response.status_code == 500
        assert response.body == b'{"error":"unavailable"}'
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["content-type"] == "application/json;charset=utf-8"

    def test_custom_headers_never_override_framework_headers(self, make_request):
        resp = bad_request().from_trusted_message("bad").with_headers({
            "Content-Type": "text/html",
            "X-Content-Type-Options": "sniff-away",
            "X-Custom": "kept",
        })

        response = write(make_request(), resp)

        assert response.headers["content-type"] == "text/plain;charset=utf-8"
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-custom"] == "kept"

    def test_failure_without_payload_is_contract_violation(self, make_request):
        """bad_request() written before a payload is chosen must not serialize."""
        with pytest.raises(ResponseContractError):
            write(make_request(), bad_request())

        with pytest.raises(ResponseContractError):
            write(make_request(), HttpResponse(400, is_successful=False))

    def test_unsupported_payload_type(self, make_request):
        resp = HttpResponse(200, payload="<x/>", payload_type="xml")

        with pytest.raises(UnsupportedPayloadTypeError):
            write(make_request(), resp)

    def test_unencodable_json_propagates(self, make_request):
        with pytest.raises(TypeError):
            write(make_request(), ok().with_json({"value": object()}))


class TestEtag:
    """Test the conditional-cache flow."""

    def test_headers_are_set(self, make_request):
        response = write(make_request(), ok().etag().with_json({"b": 1, "a": 2}))

        expected = hashlib.sha1(b'{"a":2,"b":1}').hexdigest()
        assert response.status_code == 200
        assert response.body == b'{"a":2,"b":1}'
        assert response.headers["etag"] == f'W/"{expected}"'
        assert response.headers["cache-control"] == "max-age=1209600, private, no-cache"

    def test_stable_across_key_order(self, make_request):
        first = {"alpha": 1, "beta": {"x": 1, "y": 2}, "gamma": [3, 2, 1]}
        second = {"gamma": [3, 2, 1], "beta": {"y": 2, "x": 1}, "alpha": 1}

        etag_one = write(make_request(), ok().etag().with_json(first)).headers["etag"]
        etag_two = write(make_request(), ok().etag().with_json(second)).headers["etag"]

        assert etag_one == etag_two

    def test_changes_with_content(self, make_request):
        etag_one = write(make_request(), ok().etag().with_json({"a": 1})).headers["etag"]
        etag_two = write(make_request(), ok().etag().with_json({"a": 2})).headers["etag"]

        assert etag_one != etag_two

    def test_text_payload(self, make_request):
        response = write(make_request(), ok().etag().with_text("hello"))

        assert response.headers["etag"] == f'W/"{hashlib.sha1(b"hello").hexdigest()}"'
        assert response.body == b"hello"

    def test_matching_client_copy_gets_304(self, make_request):
        resp = ok().etag().with_json({"a": 1})
        etag = write(make_request(), resp).headers["etag"]

        response = write(make_request({"If-None-Match": etag}), ok().etag().with_json({"a": 1}))

        assert response.status_code == 304
        assert response.body == b""
        assert response.headers["etag"] == etag

    def test_stale_client_copy_gets_full_body(self, make_request):
        response = write(make_request({"If-None-Match": 'W/"stale"'}), ok().etag().with_json({"a": 1}))

        assert response.status_code == 200
        assert response.body == b'{"a":1}'

    def test_without_request_always_sends_body(self):
        response = write(None, ok().etag().with_text("hello"))

        assert response.status_code == 200
        assert "etag" in response.headers

    def test_empty_payload_skips_etag(self, make_request):
        resp = ok().etag()._response

        response = write(make_request(), resp)

        assert response.status_code == 200
        assert response.body == b""
        assert "etag" not in response.headers
