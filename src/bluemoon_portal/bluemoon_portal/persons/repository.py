from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ..common.result import FetchResult


class PersonRepository(Protocol):
    def list_all(self, **filters: Any) -> FetchResult:
        raise NotImplementedError

    def get(self, record_id: Any) -> Optional[dict]:
        raise NotImplementedError

    def search(self, *, term: str) -> FetchResult:
        """Tìm nhân khẩu theo họ tên hoặc số CMT/CCCD."""

        raise NotImplementedError

    def list_unassigned(self) -> FetchResult:
        """Nhân khẩu chưa thuộc hộ khẩu nào."""

        raise NotImplementedError

    def create(self, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def update(self, record_id: Any, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def delete(self, record_id: Any) -> None:
        raise NotImplementedError
