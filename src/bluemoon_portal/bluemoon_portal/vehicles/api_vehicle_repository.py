from __future__ import annotations

from typing import Optional

from ..api.base_repository import ApiResourceRepository
from ..common.result import FetchResult
from ..mapping.entities import VEHICLE


class ApiVehicleRepository(ApiResourceRepository):
    resource = "/vehicles"
    mapping = VEHICLE

    def list_by_household(self, household_id: int) -> FetchResult:
        return self.fetch_collection(self._path("household", household_id))

    def search(self, *, term: str) -> FetchResult:
        return self.fetch_collection(self._path("search"), params={"q": term})

    def is_plate_unique(self, plate: str, *, exclude_id: Optional[int] = None) -> bool:
        params = {"bienSoXe": plate}
        if exclude_id is not None:
            params["vehicleId"] = exclude_id
        payload = self._client.get(self._path("check-license-plate"), params=params)
        return bool(payload.get("isUnique")) if isinstance(payload, dict) else False
