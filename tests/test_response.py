import pytest
import requests

from hcloud_client.exceptions import (
    ApiError,
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnexpectedResponseError,
)
from hcloud_client.response import ResponseMediator


def make_response(status_code, body=b"", content_type="application/json"):
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    if content_type:
        response.headers["Content-Type"] = content_type
    return response


def test_json_success_is_decoded():
    assert ResponseMediator.get_content(make_response(200, b'{"id":1}')) == {"id": 1}


def test_json_content_type_parameters_are_ignored():
    response = make_response(200, b"[1, 2]", "application/json; charset=utf-8")

    assert ResponseMediator.get_content(response) == [1, 2]


def test_vendor_json_content_type_is_decoded():
    response = make_response(201, b'"queued"', "application/vnd.hcloud+json")

    assert ResponseMediator.get_content(response) == "queued"


def test_non_json_success_returns_raw_bytes():
    response = make_response(200, b"plain text", "text/plain")

    assert ResponseMediator.get_content(response) == b"plain text"


def test_empty_success_body_returns_none():
    assert ResponseMediator.get_content(make_response(204, b"", None)) is None


def test_malformed_json_success_raises_unexpected_response():
    with pytest.raises(UnexpectedResponseError):
        ResponseMediator.get_content(make_response(200, b"{not json"))


def test_error_envelope_is_mapped_to_typed_error():
    body = b'{"error":{"code":"not_found","message":"x"}}'

    with pytest.raises(ApiError) as excinfo:
        ResponseMediator.get_content(make_response(404, body))

    error = excinfo.value
    assert isinstance(error, NotFoundError)
    assert error.status_code == 404
    assert error.error_code == "not_found"
    assert error.message == "x"
    assert error.raw_body == body


def test_error_details_are_attached():
    body = (
        b'{"error":{"code":"invalid_input","message":"invalid input in field name",'
        b'"details":{"fields":[{"name":"name","messages":["is too long"]}]}}}'
    )

    with pytest.raises(InvalidInputError) as excinfo:
        ResponseMediator.get_content(make_response(422, body))

    assert excinfo.value.details == {"fields": [{"name": "name", "messages": ["is too long"]}]}


def test_non_json_error_falls_back_to_generic_error():
    body = b"<html>upstream failure</html>"

    with pytest.raises(ApiError) as excinfo:
        ResponseMediator.get_content(make_response(500, body, "text/html"))

    error = excinfo.value
    assert isinstance(error, ServerError)
    assert error.status_code == 500
    assert error.error_code is None
    assert error.raw_body == body
    assert str(error) == "500 Internal Server Error"


def test_json_error_without_envelope_is_generic():
    with pytest.raises(ApiError) as excinfo:
        ResponseMediator.get_content(make_response(400, b'{"message":"nope"}'))

    assert excinfo.value.error_code is None
    assert excinfo.value.message == "400 Bad Request"


def test_empty_error_body_uses_status_text():
    with pytest.raises(RateLimitError) as excinfo:
        ResponseMediator.get_content(make_response(429, b"", None))

    assert excinfo.value.message == "429 Too Many Requests"
    assert excinfo.value.raw_body == b""


def test_unauthorized_maps_to_authentication_error():
    body = b'{"error":{"code":"unauthorized","message":"unable to authenticate"}}'

    with pytest.raises(AuthenticationError):
        ResponseMediator.get_content(make_response(401, body))


def test_unknown_status_codes_use_base_error():
    with pytest.raises(ApiError) as excinfo:
        ResponseMediator.get_content(make_response(499, b"", None))

    assert type(excinfo.value) is ApiError
    assert excinfo.value.message == "HTTP 499"


def test_body_is_read_once():
    class CountingResponse:
        headers = {"Content-Type": "application/json"}

        def __init__(self, status_code, body):
            self.status_code = status_code
            self._body = body
            self.reads = 0

        @property
        def content(self):
            self.reads += 1
            return self._body

    ok = CountingResponse(200, b'{"ok": true}')
    assert ResponseMediator.get_content(ok) == {"ok": True}
    assert ok.reads == 1

    failed = CountingResponse(409, b'{"error":{"code":"conflict","message":"locked"}}')
    with pytest.raises(ApiError):
        ResponseMediator.get_content(failed)
    assert failed.reads == 1


def test_get_pagination_reads_meta():
    payload = {
        "servers": [],
        "meta": {"pagination": {"page": 2, "per_page": 25, "next_page": None}},
    }

    assert ResponseMediator.get_pagination(payload)["page"] == 2
    assert ResponseMediator.get_pagination({"servers": []}) is None
    assert ResponseMediator.get_pagination([1, 2]) is None
