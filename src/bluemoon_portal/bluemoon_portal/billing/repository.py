from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ..common.result import FetchResult


class UtilityPaymentRepository(Protocol):
    def list_all(self, **filters: Any) -> FetchResult:
        raise NotImplementedError

    def list_by_household(self, household_id: int) -> FetchResult:
        raise NotImplementedError

    def list_for_month(self, household_id: int, *, month: int, year: int) -> FetchResult:
        raise NotImplementedError

    def list_outstanding(self, *, month: int, year: int) -> FetchResult:
        """Các khoản phí tháng chưa thanh toán."""

        raise NotImplementedError

    def get(self, record_id: Any) -> Optional[dict]:
        raise NotImplementedError

    def create(self, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def update(self, record_id: Any, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def delete(self, record_id: Any) -> None:
        raise NotImplementedError
