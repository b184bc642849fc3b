from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol

from ..common.result import FetchResult


class PaymentRepository(Protocol):
    def list_all(self, **filters: Any) -> FetchResult:
        raise NotImplementedError

    def list_by_household(self, household_id: int) -> FetchResult:
        raise NotImplementedError

    def list_by_fee(self, fee_id: int) -> FetchResult:
        raise NotImplementedError

    def list_unverified(self) -> FetchResult:
        raise NotImplementedError

    def list_by_date_range(self, *, start: date, end: date) -> FetchResult:
        raise NotImplementedError

    def find_for_household_and_fee(self, household_id: int, fee_id: int) -> Optional[dict]:
        """Trả về None nếu hộ chưa nộp khoản thu này."""

        raise NotImplementedError

    def get(self, record_id: Any) -> Optional[dict]:
        raise NotImplementedError

    def create(self, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def update(self, record_id: Any, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def set_verified(self, payment_id: int, *, verified: bool) -> None:
        raise NotImplementedError

    def delete(self, record_id: Any) -> None:
        raise NotImplementedError
