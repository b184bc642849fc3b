from __future__ import annotations

from collections.abc import Set
from typing import Any, Mapping, Optional

from ..auth.capabilities import Capability, require_capability
from ..billing.calculator.base import MonthlyFeeCalculator
from ..billing.calculator.standard_calculator import StandardMonthlyFeeCalculator
from ..common.result import FetchResult
from ..common.validators import require_id, require_month, require_year
from ..core.enums import Role, ServiceType
from ..core.exceptions import ValidationError
from ..mapping.entities import UTILITY_BILL
from .repository import UtilityBillRepository


class UtilityService:
    def __init__(self, bills: UtilityBillRepository, *, calculator: Optional[MonthlyFeeCalculator] = None):
        self._bills = bills
        self._calculator = calculator or StandardMonthlyFeeCalculator()

    def list_bills(
        self,
        *,
        current_roles: Set[Role],
        household_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        unpaid: bool = False,
    ) -> FetchResult:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        if unpaid:
            return self._bills.list_unpaid()
        if household_id is None:
            return self._bills.list_all()
        household_id = require_id(household_id, "Mã hộ khẩu")
        if month is not None and year is not None:
            return self._bills.list_for_month(household_id, month=require_month(month), year=require_year(year))
        return self._bills.list_by_household(household_id)

    def get_bill(self, *, current_roles: Set[Role], bill_id: int) -> dict:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        bill = self._bills.get(require_id(bill_id, "Mã hoá đơn"))
        if not bill:
            raise ValidationError("Hoá đơn không tồn tại")
        return bill

    @staticmethod
    def _build(data: Mapping[str, Any]) -> dict:
        record = UTILITY_BILL.normalize(data)
        if record["serviceType"] not in ServiceType.__members__:
            raise ValidationError("Loại dịch vụ không hợp lệ")
        record["householdId"] = require_id(record["householdId"], "Hộ khẩu")
        record["month"] = require_month(record["month"])
        record["year"] = require_year(record["year"])
        if record["amount"] < 0:
            raise ValidationError("Số tiền không được âm")
        if record["newReading"] < record["oldReading"]:
            raise ValidationError("Chỉ số mới không được nhỏ hơn chỉ số cũ")
        return record

    def create_bill(self, *, current_roles: Set[Role], data: Mapping[str, Any]) -> Optional[dict]:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        record = self._build(data)
        record["id"] = None
        return self._bills.create(record)

    def update_bill(self, *, current_roles: Set[Role], bill_id: int, data: Mapping[str, Any]) -> Optional[dict]:
        existing = self.get_bill(current_roles=current_roles, bill_id=bill_id)
        record = self._build({**existing, **dict(data)})
        record["id"] = existing["id"]
        return self._bills.update(existing["id"], record)

    def set_paid(self, *, current_roles: Set[Role], bill_id: int, paid: bool) -> None:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        self._bills.set_paid(require_id(bill_id, "Mã hoá đơn"), paid=bool(paid))

    def delete_bill(self, *, current_roles: Set[Role], bill_id: int) -> None:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        self._bills.delete(require_id(bill_id, "Mã hoá đơn"))

    def total_cost(self, bills: list[Mapping]) -> float:
        return self._calculator.utility_fee(bills)
