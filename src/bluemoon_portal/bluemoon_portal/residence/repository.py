from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ..common.result import FetchResult


class TemporaryResidenceRepository(Protocol):
    def list_page(self, *, page: int = 0, size: int = 50, **filters: Any) -> FetchResult:
        raise NotImplementedError

    def list_by_person(self, person_id: int) -> FetchResult:
        raise NotImplementedError

    def get(self, record_id: Any) -> Optional[dict]:
        raise NotImplementedError

    def create(self, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def update(self, record_id: Any, record: Mapping) -> Optional[dict]:
        raise NotImplementedError

    def delete(self, record_id: Any) -> None:
        raise NotImplementedError
