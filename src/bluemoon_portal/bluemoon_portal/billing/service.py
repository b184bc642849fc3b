from __future__ import annotations

import logging
from collections.abc import Set
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..auth.capabilities import Capability, require_capability
from ..common import datetime_utils
from ..common.result import FetchResult
from ..common.validators import require_id, require_month, require_year
from ..core.enums import PaymentMethod, Role, UtilityPaymentStatus
from ..core.exceptions import ValidationError
from ..households.repository import HouseholdRepository
from ..mapping.entities import UTILITY_PAYMENT
from ..utilities.repository import UtilityBillRepository
from ..vehicles.repository import VehicleRepository
from .calculator.base import MonthlyFeeCalculator
from .calculator.standard_calculator import StandardMonthlyFeeCalculator
from .repository import UtilityPaymentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HouseholdBill:
    """Phí gửi xe và phí dịch vụ của một hộ trong một tháng."""

    household_id: int
    month: int
    year: int
    parking_fee: float
    utility_fee: float
    total_amount: float
    vehicle_count: int
    is_paid: bool
    vehicles: list = field(default_factory=list)
    utility_bills: list = field(default_factory=list)

    @property
    def payment_status(self) -> str:
        return (UtilityPaymentStatus.DA_THANH_TOAN if self.is_paid else UtilityPaymentStatus.CHUA_THANH_TOAN).value


@dataclass(frozen=True)
class PaymentSummary:
    month: int
    year: int
    total_collected: float
    total_outstanding: float
    total_households: int
    paid_households: int
    unpaid_households: int
    rows: list[dict]

    @property
    def paid_percentage(self) -> float:
        if not self.total_households:
            return 0
        return self.paid_households / self.total_households * 100


def is_paid_status(status: Any) -> bool:
    try:
        return UtilityPaymentStatus(status).is_paid
    except ValueError:
        return False


class BillingService:
    def __init__(
        self,
        payments: UtilityPaymentRepository,
        *,
        households: HouseholdRepository,
        vehicles: VehicleRepository,
        bills: UtilityBillRepository,
        calculator: Optional[MonthlyFeeCalculator] = None,
    ):
        self._payments = payments
        self._households = households
        self._vehicles = vehicles
        self._bills = bills
        self._calculator = calculator or StandardMonthlyFeeCalculator()

    def is_paid(self, household_id: int, *, month: int, year: int) -> bool:
        payments = self._payments.list_for_month(household_id, month=month, year=year).unwrap()
        return any(is_paid_status(p.get("status")) for p in payments)

    def household_bill(self, *, current_roles: Set[Role], household_id: int, month: int, year: int) -> HouseholdBill:
        """Tính phí tháng của một hộ.

        Lỗi tải xe, hoá đơn hoặc trạng thái thanh toán được ném ra dưới dạng
        ApiError thay vì trả về số 0.
        """

        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        household_id = require_id(household_id, "Mã hộ khẩu")
        month, year = require_month(month), require_year(year)
        vehicles = self._vehicles.list_by_household(household_id).unwrap()
        bills = self._bills.list_for_month(household_id, month=month, year=year).unwrap()
        parking = self._calculator.parking_fee(vehicles)
        utility = self._calculator.utility_fee(bills)
        return HouseholdBill(
            household_id=household_id,
            month=month,
            year=year,
            parking_fee=parking,
            utility_fee=utility,
            total_amount=parking + utility,
            vehicle_count=len(vehicles),
            is_paid=self.is_paid(household_id, month=month, year=year),
            vehicles=vehicles,
            utility_bills=bills,
        )

    def payment_summary(self, *, current_roles: Set[Role], month: int, year: int) -> PaymentSummary:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        month, year = require_month(month), require_year(year)
        households = self._households.list_all().unwrap()

        rows: list[dict] = []
        collected = outstanding = 0
        paid = 0
        for h in households:
            bill = self.household_bill(current_roles=current_roles, household_id=h["id"], month=month, year=year)
            rows.append(
                {
                    "householdId": h["id"],
                    "householdNumber": h.get("soHoKhau") or "",
                    "ownerName": h.get("ownerName") or "",
                    "isPaid": bill.is_paid,
                    "totalAmount": bill.total_amount,
                    "parkingFee": bill.parking_fee,
                    "utilityFee": bill.utility_fee,
                }
            )
            if bill.is_paid:
                collected += bill.total_amount
                paid += 1
            else:
                outstanding += bill.total_amount

        return PaymentSummary(
            month=month,
            year=year,
            total_collected=collected,
            total_outstanding=outstanding,
            total_households=len(households),
            paid_households=paid,
            unpaid_households=len(households) - paid,
            rows=rows,
        )

    def list_payments(
        self,
        *,
        current_roles: Set[Role],
        household_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        outstanding: bool = False,
    ) -> FetchResult:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        if outstanding:
            return self._payments.list_outstanding(month=require_month(month), year=require_year(year))
        if household_id is None:
            return self._payments.list_all()
        household_id = require_id(household_id, "Mã hộ khẩu")
        if month is not None and year is not None:
            return self._payments.list_for_month(household_id, month=require_month(month), year=require_year(year))
        return self._payments.list_by_household(household_id)

    @staticmethod
    def build_payment(data: Mapping[str, Any]) -> dict:
        """Chuẩn hoá một khoản thanh toán phí tháng trước khi gửi lên máy chủ."""

        record = UTILITY_PAYMENT.normalize(data)
        record["householdId"] = require_id(record["householdId"], "Hộ khẩu")
        record["month"] = require_month(record["month"])
        record["year"] = require_year(record["year"])
        if record["parkingFee"] < 0 or record["utilityFee"] < 0:
            raise ValidationError("Số tiền không được âm")
        if record["totalAmount"] <= 0:
            record["totalAmount"] = record["parkingFee"] + record["utilityFee"]
        if not record["paymentDate"]:
            record["paymentDate"] = datetime_utils.today().isoformat()
        method = str(record["paymentMethod"] or PaymentMethod.TIEN_MAT.value).strip().upper()
        if method not in PaymentMethod.__members__:
            raise ValidationError("Phương thức thanh toán không hợp lệ")
        record["paymentMethod"] = method
        status = str(record["status"] or UtilityPaymentStatus.DA_THANH_TOAN.value).strip().upper()
        if status not in UtilityPaymentStatus.__members__:
            raise ValidationError("Trạng thái thanh toán không hợp lệ")
        record["status"] = status
        return record

    def record_payment(self, *, current_roles: Set[Role], data: Mapping[str, Any]) -> Optional[dict]:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        record = self.build_payment(data)
        record["id"] = None
        logger.info(
            "Recording monthly payment for household %s (%s/%s): %s",
            record["householdId"],
            record["month"],
            record["year"],
            record["totalAmount"],
        )
        return self._payments.create(record)

    def mark_paid(
        self,
        *,
        current_roles: Set[Role],
        payment_id: int,
        method: str = PaymentMethod.TIEN_MAT.value,
    ) -> Optional[dict]:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        payment_id = require_id(payment_id, "Mã thanh toán")
        existing = self._payments.get(payment_id)
        if not existing:
            raise ValidationError("Khoản thanh toán không tồn tại")
        record = self.build_payment(
            {
                **existing,
                "status": UtilityPaymentStatus.THANH_CONG.value,
                "paymentDate": datetime_utils.today().isoformat(),
                "paymentMethod": method,
            }
        )
        record["id"] = payment_id
        return self._payments.update(payment_id, record)

    def delete_payment(self, *, current_roles: Set[Role], payment_id: int) -> None:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        self._payments.delete(require_id(payment_id, "Mã thanh toán"))
