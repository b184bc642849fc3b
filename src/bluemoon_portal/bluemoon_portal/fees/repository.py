from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ..common.result import FetchResult


class FeeRepository(Protocol):
    def list_all(self, **filters: Any) -> FetchResult:
        raise NotImplementedError

    def list_by_type(self, *, mandatory: bool) -> FetchResult:
        raise NotImplementedError

    def get(self, record_id: Any) -> Optional[dict]:
        raise NotImplementedError

    def create(self, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def update(self, record_id: Any, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def set_status(self, fee_id: int, *, active: bool) -> None:
        """Bật/tắt khoản thu (PATCH /fees/{id}/status với khóa ``hoatDong``)."""

        raise NotImplementedError

    def delete(self, record_id: Any) -> None:
        raise NotImplementedError

    def statistics(self, fee_id: int) -> dict:
        raise NotImplementedError

    def paid_households(self, fee_id: int) -> dict:
        raise NotImplementedError
