from __future__ import annotations

from typing import Any, Mapping, Optional

from ..api.base_repository import ApiResourceRepository
from ..common.result import FetchResult
from ..mapping.entities import HOUSEHOLD, HOUSEHOLD_HISTORY, HOUSEHOLD_MEMBER, PERSON


class ApiHouseholdRepository(ApiResourceRepository):
    resource = "/households"
    mapping = HOUSEHOLD

    def search(self, *, keyword: str) -> FetchResult:
        return self.fetch_collection(self._path("search"), params={"keyword": keyword})

    def activate(self, household_id: int) -> None:
        self._client.put(self._path(household_id, "activate"))

    def list_members(self, household_id: int) -> FetchResult:
        return self.fetch_collection(self._path(household_id, "members"), mapping=PERSON)

    def add_member(self, household_id: int, member: Mapping) -> None:
        self._client.post(self._path(household_id, "members"), json=HOUSEHOLD_MEMBER.to_wire(member))

    def remove_member(self, household_id: int, person_id: int, *, notes: Optional[str] = None) -> None:
        params: dict[str, Any] = {"ghiChu": notes} if notes else {}
        self._client.delete(self._path(household_id, "members", person_id), params=params)

    def list_history(self, household_id: int) -> FetchResult:
        return self.fetch_collection(f"/household-history/household/{household_id}", mapping=HOUSEHOLD_HISTORY)
