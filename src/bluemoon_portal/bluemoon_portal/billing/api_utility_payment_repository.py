from __future__ import annotations

from ..api.base_repository import ApiResourceRepository
from ..common.result import FetchResult
from ..mapping.entities import UTILITY_PAYMENT


class ApiUtilityPaymentRepository(ApiResourceRepository):
    resource = "/utility-payments"
    mapping = UTILITY_PAYMENT

    def list_by_household(self, household_id: int) -> FetchResult:
        return self.fetch_collection(self._path("household", household_id))

    def list_for_month(self, household_id: int, *, month: int, year: int) -> FetchResult:
        return self.fetch_collection(self._path("household", household_id, "month", month, "year", year))

    def list_outstanding(self, *, month: int, year: int) -> FetchResult:
        return self.fetch_collection(self._path("outstanding"), params={"thang": month, "nam": year})
