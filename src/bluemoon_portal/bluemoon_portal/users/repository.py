from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ..common.result import FetchResult


class UserRepository(Protocol):
    def list_all(self, **filters: Any) -> FetchResult:
        raise NotImplementedError

    def get(self, record_id: Any) -> Optional[dict]:
        raise NotImplementedError

    def create(self, record: Mapping, *, password: Optional[str] = None) -> Optional[dict]:
        """Mật khẩu chỉ được gửi đi, không bao giờ đọc lại."""

        raise NotImplementedError

    def update(self, record_id: Any, record: Mapping, *, password: Optional[str] = None) -> Optional[dict]:
        raise NotImplementedError

    def delete(self, record_id: Any) -> None:
        raise NotImplementedError
