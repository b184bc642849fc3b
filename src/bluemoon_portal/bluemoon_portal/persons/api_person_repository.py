from __future__ import annotations

from ..api.base_repository import ApiResourceRepository
from ..common.result import FetchResult
from ..mapping.entities import PERSON


class ApiPersonRepository(ApiResourceRepository):
    resource = "/persons"
    mapping = PERSON

    def search(self, *, term: str) -> FetchResult:
        return self.fetch_collection(self._path("search"), params={"q": term})

    def list_unassigned(self) -> FetchResult:
        return self.fetch_collection(self._path("unassigned"))
