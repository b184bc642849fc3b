from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any, Optional

from ..api.base_repository import ApiResourceRepository
from ..common.result import FetchResult
from ..core.exceptions import ApiError
from ..mapping.entities import PAYMENT

# Display fields read from the nested household/fee objects the server embeds.
_DISPLAY_FIELDS = (
    ("householdOwnerName", "hoKhau", ("chuHo",)),
    ("householdAddress", "hoKhau", ("address", "diaChi")),
    ("soHoKhau", "hoKhau", ("soHoKhau",)),
    ("feeName", "khoanThu", ("tenKhoanThu",)),
    ("feeAmount", "khoanThu", ("soTien",)),
)


def display_fields(raw: Any) -> dict:
    out: dict = {
        "householdOwnerName": "",
        "householdAddress": "",
        "soHoKhau": "",
        "feeName": "",
        "feeAmount": 0,
    }
    if not isinstance(raw, Mapping):
        return out
    for key, parent, sources in _DISPLAY_FIELDS:
        nested = raw.get(parent)
        if not isinstance(nested, Mapping):
            continue
        for source in sources:
            value = nested.get(source)
            if value not in (None, ""):
                out[key] = value
                break
    return out


class ApiPaymentRepository(ApiResourceRepository):
    resource = "/payments"
    mapping = PAYMENT

    def _to_canonical(self, raw: Any) -> Optional[dict]:
        record = PAYMENT.to_canonical(raw)
        if record is None:
            return None
        return {**record, **display_fields(raw)}

    def list_by_household(self, household_id: int) -> FetchResult:
        return self.fetch_collection(self._path("household", household_id))

    def list_by_fee(self, fee_id: int) -> FetchResult:
        return self.fetch_collection(self._path("fee", fee_id))

    def list_unverified(self) -> FetchResult:
        return self.fetch_collection(self._path("unverified"))

    def list_by_date_range(self, *, start: date, end: date) -> FetchResult:
        return self.fetch_collection(
            self._path("date-range"),
            params={"startDate": start.isoformat(), "endDate": end.isoformat()},
        )

    def find_for_household_and_fee(self, household_id: int, fee_id: int) -> Optional[dict]:
        try:
            return self.fetch_one(self._path("household", household_id, "fee", fee_id))
        except ApiError as e:
            if e.status == 404:
                return None
            raise

    def set_verified(self, payment_id: int, *, verified: bool) -> None:
        self._client.patch(self._path(payment_id, "verify" if verified else "unverify"))
