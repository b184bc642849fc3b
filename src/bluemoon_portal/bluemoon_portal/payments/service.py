from __future__ import annotations

import logging
from collections.abc import Set
from datetime import date
from typing import Any, Mapping, Optional

from ..auth.capabilities import Action, Capability, can_perform, require_action, require_capability
from ..common import datetime_utils
from ..common.result import FetchResult
from ..common.validators import parse_flag, require_id
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..fees.repository import FeeRepository
from ..households.repository import HouseholdRepository
from ..mapping.entities import PAYMENT
from .enrichment import enrich_payments
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(
        self,
        payments: PaymentRepository,
        households: Optional[HouseholdRepository] = None,
        fees: Optional[FeeRepository] = None,
    ):
        self._payments = payments
        self._households = households
        self._fees = fees

    def _lookup_lists(self, payments: list[dict]) -> tuple[list, list]:
        """Household/fee lists for display fields the payments lack.

        Only fetched when some payment is missing them; a failed lookup leaves
        the fields blank.
        """

        needs_household = any(p.get("householdId") and not p.get("householdOwnerName") for p in payments)
        needs_fee = any(p.get("feeId") and not p.get("feeName") for p in payments)
        households: list = []
        fees: list = []
        if needs_household and self._households is not None:
            result = self._households.list_all(showAll="true")
            if result.failed:
                logger.warning("Household lookup for payments failed: %s", result.error.message)
            households = result.items
        if needs_fee and self._fees is not None:
            result = self._fees.list_all(showAll="true")
            if result.failed:
                logger.warning("Fee lookup for payments failed: %s", result.error.message)
            fees = result.items
        return households, fees

    def _enriched(self, result: FetchResult) -> FetchResult:
        if result.failed:
            return result
        households, fees = self._lookup_lists(result.items)
        return FetchResult.success(enrich_payments(result.items, households=households, fees=fees))

    def list_payments(
        self,
        *,
        current_roles: Set[Role],
        household_id: Optional[int] = None,
        fee_id: Optional[int] = None,
        unverified: bool = False,
    ) -> FetchResult:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        if unverified:
            result = self._payments.list_unverified()
        elif household_id is not None:
            result = self._payments.list_by_household(require_id(household_id, "Mã hộ khẩu"))
        elif fee_id is not None:
            result = self._payments.list_by_fee(require_id(fee_id, "Mã khoản thu"))
        else:
            result = self._payments.list_all()
        return self._enriched(result)

    def list_between(self, *, current_roles: Set[Role], start: date, end: date) -> FetchResult:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        if start > end:
            raise ValidationError("Ngày bắt đầu phải trước ngày kết thúc")
        return self._enriched(self._payments.list_by_date_range(start=start, end=end))

    def get_payment(self, *, current_roles: Set[Role], payment_id: int) -> dict:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        payment = self._payments.get(require_id(payment_id, "Mã phiếu thu"))
        if not payment:
            raise ValidationError("Phiếu thu không tồn tại")
        return payment

    def find_for_household_and_fee(self, *, current_roles: Set[Role], household_id: int, fee_id: int) -> Optional[dict]:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        return self._payments.find_for_household_and_fee(
            require_id(household_id, "Mã hộ khẩu"),
            require_id(fee_id, "Mã khoản thu"),
        )

    @staticmethod
    def _build(data: Mapping[str, Any]) -> dict:
        record = PAYMENT.normalize(data)
        record["householdId"] = require_id(record["householdId"], "Hộ khẩu")
        record["feeId"] = require_id(record["feeId"], "Khoản thu")
        if record["amount"] < 0 or record["amountPaid"] < 0:
            raise ValidationError("Số tiền không được âm")
        if not record["amountPaid"]:
            record["amountPaid"] = record["amount"]
        if not record["paymentDate"]:
            record["paymentDate"] = datetime_utils.today().isoformat()
        return record

    def create_payment(self, *, current_roles: Set[Role], data: Mapping[str, Any]) -> Optional[dict]:
        """Record a payment; only admins may mark it verified on entry."""

        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        record = self._build(data)
        record["id"] = None
        if can_perform(current_roles, Action.APPROVE_ON_CREATE):
            record["verified"] = parse_flag(data.get("verified"))
        else:
            record["verified"] = False
        return self._payments.create(record)

    def update_payment(self, *, current_roles: Set[Role], payment_id: int, data: Mapping[str, Any]) -> Optional[dict]:
        existing = self.get_payment(current_roles=current_roles, payment_id=payment_id)
        record = self._build({**existing, **dict(data)})
        record["id"] = existing["id"]
        if can_perform(current_roles, Action.APPROVE_ON_CREATE):
            record["verified"] = parse_flag(data.get("verified"), default=existing["verified"])
        else:
            record["verified"] = existing["verified"]
        return self._payments.update(existing["id"], record)

    def set_verified(self, *, current_roles: Set[Role], payment_id: int, verified: bool) -> None:
        require_action(current_roles, Action.VERIFY_PAYMENT)
        self._payments.set_verified(require_id(payment_id, "Mã phiếu thu"), verified=bool(verified))

    def delete_payment(self, *, current_roles: Set[Role], payment_id: int) -> None:
        require_action(current_roles, Action.DELETE_PAYMENT)
        self._payments.delete(require_id(payment_id, "Mã phiếu thu"))
