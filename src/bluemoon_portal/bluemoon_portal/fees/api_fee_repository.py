from __future__ import annotations

from collections.abc import Mapping

from ..api.base_repository import ApiResourceRepository
from ..api.client import as_collection
from ..common.result import FetchResult
from ..mapping.entities import FEE, FEE_STATISTICS


class ApiFeeRepository(ApiResourceRepository):
    resource = "/fees"
    mapping = FEE

    def list_by_type(self, *, mandatory: bool) -> FetchResult:
        return self.fetch_collection(self._path("bat-buoc", "true" if mandatory else "false"))

    def set_status(self, fee_id: int, *, active: bool) -> None:
        body = {FEE.field("active").wire: bool(active)}
        self._client.patch(self._path(fee_id, "status"), json=body)

    def statistics(self, fee_id: int) -> dict:
        payload = self._client.get(self._path(fee_id, "statistics"))
        return FEE_STATISTICS.to_canonical(payload) or FEE_STATISTICS.to_canonical({})

    def paid_households(self, fee_id: int) -> dict:
        payload = self._client.get(self._path(fee_id, "paid-households"))
        if not isinstance(payload, Mapping):
            payload = {}
        households = as_collection(payload.get("paidHouseholds")) or []
        return {
            "feeId": payload.get("feeId", fee_id),
            "feeName": payload.get("feeName") or "",
            "totalCollected": payload.get("totalCollected") or 0,
            "totalPaidHouseholds": len(households),
            "paidHouseholds": [h for h in households if isinstance(h, Mapping)],
        }
