from __future__ import annotations

import pytest

from src.bluemoon_portal.bluemoon_portal.auth.claims import resolve_role
from src.bluemoon_portal.bluemoon_portal.auth.service import AuthService
from src.bluemoon_portal.bluemoon_portal.core.enums import Role
from src.bluemoon_portal.bluemoon_portal.core.exceptions import ApiError, AuthenticationError, ValidationError


class FakeClient:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.calls = []

    def post(self, path, json=None, *, params=None):
        self.calls.append((path, json))
        if self._error is not None:
            raise self._error
        return self._response


def test_login_posts_credentials_and_keeps_user_role():
    client = FakeClient({"token": "h.p.s", "user": {"username": "admin", "role": "ROLE_ADMIN"}})

    credential = AuthService(client).login("admin", "secret")

    assert client.calls == [("/auth/login", {"username": "admin", "password": "secret"})]
    assert credential.token == "h.p.s"
    assert resolve_role(credential) is Role.ADMIN


def test_login_accepts_access_token_and_top_level_role():
    client = FakeClient({"accessToken": "h.p.s", "role": "KE_TOAN"})

    credential = AuthService(client).login("kt", "secret")

    assert credential.user == {"username": "kt", "role": "KE_TOAN"}


def test_login_rejected_uses_server_message():
    client = FakeClient(error=ApiError("401", status=401, payload={"message": "Tài khoản bị khóa"}))

    with pytest.raises(AuthenticationError) as exc:
        AuthService(client).login("admin", "bad")
    assert str(exc.value) == "Tài khoản bị khóa"


def test_login_without_token_fails():
    with pytest.raises(AuthenticationError):
        AuthService(FakeClient({"message": "ok"})).login("admin", "secret")


def test_login_transport_error_propagates():
    with pytest.raises(ApiError):
        AuthService(FakeClient(error=ApiError("down"))).login("admin", "secret")


def test_login_requires_username():
    with pytest.raises(ValidationError):
        AuthService(FakeClient()).login("  ", "secret")


def test_from_token_rejects_unreadable_token():
    with pytest.raises(AuthenticationError):
        AuthService.from_token("not-a-token")
