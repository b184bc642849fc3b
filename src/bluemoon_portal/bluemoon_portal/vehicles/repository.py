from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ..common.result import FetchResult


class VehicleRepository(Protocol):
    def list_all(self, **filters: Any) -> FetchResult:
        raise NotImplementedError

    def list_by_household(self, household_id: int) -> FetchResult:
        raise NotImplementedError

    def search(self, *, term: str) -> FetchResult:
        """Tìm xe theo biển số hoặc hãng xe."""

        raise NotImplementedError

    def is_plate_unique(self, plate: str, *, exclude_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def get(self, record_id: Any) -> Optional[dict]:
        raise NotImplementedError

    def create(self, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def update(self, record_id: Any, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def delete(self, record_id: Any) -> None:
        raise NotImplementedError
