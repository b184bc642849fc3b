from __future__ import annotations

from collections.abc import Set
from typing import Any, Mapping, Optional

from ..auth.capabilities import Action, require_action
from ..common.result import FetchResult
from ..common.validators import optional_text, parse_flag, require_id, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..mapping.entities import USER
from .repository import UserRepository


class UserService:
    """Use case: manage portal accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, *, current_roles: Set[Role]) -> FetchResult:
        require_action(current_roles, Action.MANAGE_USERS)
        return self._users.list_all()

    @staticmethod
    def _build(data: Mapping[str, Any]) -> dict:
        record = USER.normalize(data)
        record["username"] = require_non_empty(record["username"], "Tên đăng nhập")
        record["fullName"] = require_non_empty(record["fullName"], "Họ tên")
        role = Role.parse(record["role"])
        if role is None:
            raise ValidationError("Vai trò không hợp lệ")
        record["role"] = role.value
        record["enabled"] = parse_flag(data.get("enabled"), default=True)
        return record

    def create_user(self, *, current_roles: Set[Role], data: Mapping[str, Any]) -> Optional[dict]:
        require_action(current_roles, Action.MANAGE_USERS)
        record = self._build(data)
        password = require_min_length(str(data.get("password") or ""), "Mật khẩu", 6)
        record["id"] = None
        return self._users.create(record, password=password)

    def update_user(self, *, current_roles: Set[Role], user_id: int, data: Mapping[str, Any]) -> Optional[dict]:
        require_action(current_roles, Action.MANAGE_USERS)
        user_id = require_id(user_id, "Mã người dùng")
        existing = self._users.get(user_id)
        if not existing:
            raise ValidationError("Người dùng không tồn tại")
        record = self._build({**existing, **dict(data)})
        record["id"] = user_id
        # blank password keeps the current one
        password = optional_text(data.get("password"))
        if password is not None:
            require_min_length(password, "Mật khẩu", 6)
        return self._users.update(user_id, record, password=password)

    def delete_user(self, *, current_roles: Set[Role], user_id: int, current_username: str = "") -> None:
        require_action(current_roles, Action.MANAGE_USERS)
        user_id = require_id(user_id, "Mã người dùng")
        existing = self._users.get(user_id)
        if existing and current_username and existing.get("username") == current_username:
            raise ValidationError("Bạn không thể tự xóa tài khoản của chính mình!")
        self._users.delete(user_id)
