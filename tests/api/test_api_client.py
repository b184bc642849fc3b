from __future__ import annotations

import json as jsonlib

import pytest
import requests

from src.bluemoon_portal.bluemoon_portal.api.client import ApiClient, as_collection
from src.bluemoon_portal.bluemoon_portal.core.exceptions import ApiError


class FakeResponse:
    def __init__(self, status_code=200, body=None, *, content_type="application/json", raw=None):
        self.status_code = status_code
        self.url = "http://bluemoon.test/api/x"
        self.headers = {"Content-Type": content_type} if content_type else {}
        if raw is not None:
            self.text = raw
        elif body is None:
            self.text = ""
        else:
            self.text = jsonlib.dumps(body)
        self.content = self.text.encode("utf-8")

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return jsonlib.loads(self.text)


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def make_client(session, token="abc"):
    return ApiClient("http://bluemoon.test/api/", token_provider=lambda: token, timeout=5, session=session)


def test_request_sends_bearer_token_and_joins_url():
    session = FakeSession(FakeResponse(body=[{"id": 1}]))

    payload = make_client(session).get("/ho-khau", params={"showAll": "true"})

    method, url, kwargs = session.calls[0]
    assert payload == [{"id": 1}]
    assert method == "GET"
    assert url == "http://bluemoon.test/api/ho-khau"
    assert kwargs["headers"]["Authorization"] == "Bearer abc"
    assert kwargs["params"] == {"showAll": "true"}
    assert kwargs["timeout"] == 5


def test_no_token_no_authorization_header():
    session = FakeSession(FakeResponse(body={}))

    make_client(session, token=None).get("/khoan-thu")

    assert "Authorization" not in session.calls[0][2]["headers"]


def test_transport_error_becomes_api_error():
    session = FakeSession(error=requests.ConnectionError("refused"))

    with pytest.raises(ApiError) as exc:
        make_client(session).get("/ho-khau")
    assert exc.value.status is None


def test_error_status_keeps_payload():
    session = FakeSession(FakeResponse(409, {"message": "Số hộ khẩu đã tồn tại"}))

    with pytest.raises(ApiError) as exc:
        make_client(session).post("/ho-khau", json={})
    assert exc.value.status == 409
    assert exc.value.user_message("Lỗi") == "Số hộ khẩu đã tồn tại"


def test_error_status_with_unreadable_body():
    session = FakeSession(FakeResponse(500, raw="{oops"))

    with pytest.raises(ApiError) as exc:
        make_client(session).get("/ho-khau")
    assert exc.value.status == 500
    assert exc.value.user_message("Lỗi") == "Lỗi"


def test_empty_body_is_none():
    session = FakeSession(FakeResponse(204))

    assert make_client(session).delete("/ho-khau/1") is None


def test_text_body_is_returned_as_text():
    session = FakeSession(FakeResponse(body=None, content_type="text/plain", raw="deleted"))

    assert make_client(session).delete("/ho-khau/1") == "deleted"


def test_malformed_json_on_success_is_an_error():
    session = FakeSession(FakeResponse(raw="[1, 2"))

    with pytest.raises(ApiError):
        make_client(session).get("/ho-khau")


@pytest.mark.parametrize(
    "payload, expected",
    [
        (None, []),
        ([{"id": 1}], [{"id": 1}]),
        ({"content": [{"id": 2}], "totalPages": 1}, [{"id": 2}]),
        ({"content": None}, []),
        ({"id": 3, "chuHo": "A"}, [{"id": 3, "chuHo": "A"}]),
        ({"message": "Không có dữ liệu"}, []),
        ({"id": None, "chuHo": "A"}, []),
        ("text", None),
        (42, None),
    ],
)
def test_as_collection(payload, expected):
    assert as_collection(payload) == expected
