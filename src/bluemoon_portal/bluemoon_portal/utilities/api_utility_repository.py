from __future__ import annotations

from ..api.base_repository import ApiResourceRepository
from ..common.result import FetchResult
from ..mapping.entities import UTILITY_BILL


class ApiUtilityBillRepository(ApiResourceRepository):
    resource = "/utility-services"
    mapping = UTILITY_BILL

    def list_by_household(self, household_id: int) -> FetchResult:
        return self.fetch_collection(self._path("household", household_id))

    def list_for_month(self, household_id: int, *, month: int, year: int) -> FetchResult:
        return self.fetch_collection(self._path("household", household_id, "month", month, "year", year))

    def list_unpaid(self) -> FetchResult:
        return self.fetch_collection(self._path("unpaid"))

    def set_paid(self, bill_id: int, *, paid: bool) -> None:
        self._client.put(self._path(bill_id, "mark-paid" if paid else "mark-unpaid"))
