from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional

from ..api.client import ApiClient
from ..common.validators import require_non_empty
from ..core.exceptions import ApiError, AuthenticationError
from .claims import decode_claims
from .credentials import Credential

logger = logging.getLogger(__name__)

MSG_BAD_CREDENTIALS = "Sai tên đăng nhập hoặc mật khẩu"


class AuthService:
    def __init__(self, client: ApiClient):
        self._client = client

    def login(self, username: str, password: str) -> Credential:
        username = require_non_empty(username, "Tên đăng nhập")
        if not password:
            raise AuthenticationError(MSG_BAD_CREDENTIALS)

        try:
            payload = self._client.post("/auth/login", json={"username": username, "password": password})
        except ApiError as e:
            if e.status in (400, 401, 403):
                raise AuthenticationError(e.user_message(MSG_BAD_CREDENTIALS)) from e
            raise

        if not isinstance(payload, Mapping):
            raise AuthenticationError(MSG_BAD_CREDENTIALS)
        token = payload.get("token") or payload.get("accessToken")
        if not isinstance(token, str) or not token:
            raise AuthenticationError(MSG_BAD_CREDENTIALS)

        logger.info("User %s logged in", username)
        return Credential(token=token, user=self._user_record(payload, username))

    @staticmethod
    def _user_record(payload: Mapping, username: str) -> Optional[dict]:
        user = payload.get("user")
        if isinstance(user, Mapping):
            return dict(user)
        # without a role the token claims decide
        role = payload.get("role")
        if isinstance(role, str) and role:
            return {"username": username, "role": role}
        return None

    @staticmethod
    def from_token(token: str) -> Credential:
        """Credential for a token obtained elsewhere (e.g. SSO hand-off)."""

        token = (token or "").strip()
        if decode_claims(token) is None:
            raise AuthenticationError("Token không hợp lệ")
        return Credential(token=token)
