from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ..common.result import FetchResult


class HouseholdRepository(Protocol):
    def list_all(self, **filters: Any) -> FetchResult:
        raise NotImplementedError

    def get(self, record_id: Any) -> Optional[dict]:
        raise NotImplementedError

    def search(self, *, keyword: str) -> FetchResult:
        """Tìm hộ khẩu theo tên chủ hộ hoặc địa chỉ."""

        raise NotImplementedError

    def create(self, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def update(self, record_id: Any, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def delete(self, record_id: Any) -> None:
        raise NotImplementedError

    def activate(self, household_id: int) -> None:
        raise NotImplementedError

    # Members
    def list_members(self, household_id: int) -> FetchResult:
        """Nhân khẩu thuộc hộ (bản ghi theo mapping PERSON)."""

        raise NotImplementedError

    def add_member(self, household_id: int, member: Mapping) -> None:
        raise NotImplementedError

    def remove_member(self, household_id: int, person_id: int, *, notes: Optional[str] = None) -> None:
        raise NotImplementedError

    # History
    def list_history(self, household_id: int) -> FetchResult:
        raise NotImplementedError
