"""Dashboard aggregates.

Each summary loads its collections in parallel, waits for all of them, and
only then computes the derived figures. A failed load fails the whole summary
with ``ApiError``; partial figures are never shown.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Callable, Mapping, Set
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..auth.capabilities import Capability, require_capability
from ..common import datetime_utils
from ..common.result import FetchResult
from ..core.constants import DEFAULT_DASHBOARD_WORKERS, DEFAULT_MONTHLY_WINDOW, DEFAULT_RECENT_LIMIT
from ..core.enums import FeeType, Role
from ..fees.repository import FeeRepository
from ..households.repository import HouseholdRepository
from ..payments.repository import PaymentRepository
from ..persons.repository import PersonRepository

logger = logging.getLogger(__name__)

MEMBER_BUCKETS = (
    ("1 người", 1, 1),
    ("2-3 người", 2, 3),
    ("4-5 người", 4, 5),
    ("6+ người", 6, None),
)


def percentage(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round(part / whole * 100)


def _paid(payment: Mapping) -> float:
    value = payment.get("amountPaid") or 0
    return value if isinstance(value, (int, float)) and not isinstance(value, bool) else 0


@dataclass(frozen=True)
class DashboardSummary:
    total_households: int
    total_fees: int
    total_payments: int
    total_collected: float
    collection_rate: int
    verified_payments: int
    verification_rate: int


@dataclass(frozen=True)
class AccountantSummary:
    total_fees: int
    total_payments: int
    total_collected: float
    total_mandatory_collected: float
    total_voluntary_collected: float
    verified_payments: int
    unverified_payments: int
    verification_rate: int
    mandatory_fees: int
    voluntary_fees: int


@dataclass(frozen=True)
class ToTruongSummary:
    total_households: int
    active_households: int
    inactive_households: int
    total_people: int
    average_people_per_household: float
    household_member_data: list[dict]
    households_with_phone_number: int
    households_with_email: int


class DashboardService:
    def __init__(
        self,
        *,
        households: HouseholdRepository,
        fees: FeeRepository,
        payments: PaymentRepository,
        persons: PersonRepository,
        max_workers: int = DEFAULT_DASHBOARD_WORKERS,
    ):
        self._households = households
        self._fees = fees
        self._payments = payments
        self._persons = persons
        self._max_workers = max(1, max_workers)

    def _gather(self, **loaders: Callable[[], FetchResult]) -> dict[str, list]:
        """Run the loaders in parallel and return their items once all have finished.

        Each loader runs in a copy of the caller's context so it sees the same
        request (and therefore the same credential).
        """

        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(loaders))) as executor:
            futures = {
                name: executor.submit(contextvars.copy_context().run, loader) for name, loader in loaders.items()
            }
            results = {name: future.result() for name, future in futures.items()}

        for name, result in results.items():
            if result.failed:
                logger.error("Dashboard load of %s failed: %s", name, result.error.message)
        return {name: result.unwrap() for name, result in results.items()}

    def summary(self, *, current_roles: Set[Role]) -> DashboardSummary:
        require_capability(current_roles, Capability.AUTHENTICATED)
        data = self._gather(
            households=self._households.list_all,
            fees=self._fees.list_all,
            payments=self._payments.list_all,
        )
        households, fees, payments = data["households"], data["fees"], data["payments"]
        verified = sum(1 for p in payments if p.get("verified"))
        return DashboardSummary(
            total_households=len(households),
            total_fees=len(fees),
            total_payments=len(payments),
            total_collected=sum(_paid(p) for p in payments),
            collection_rate=percentage(len(payments), len(households) * len(fees)),
            verified_payments=verified,
            verification_rate=percentage(verified, len(payments)),
        )

    def recent_payments(self, *, current_roles: Set[Role], limit: int = DEFAULT_RECENT_LIMIT) -> list[dict]:
        require_capability(current_roles, Capability.AUTHENTICATED)
        payments = self._payments.list_all().unwrap()
        ordered = sorted(
            payments,
            key=lambda p: datetime_utils.coerce_date(p.get("paymentDate")) or date.min,
            reverse=True,
        )
        return ordered[: max(limit, 0)]

    def monthly_payments(
        self,
        *,
        current_roles: Set[Role],
        months: int = DEFAULT_MONTHLY_WINDOW,
        today: Optional[date] = None,
    ) -> list[dict]:
        """Collected amount per calendar month, oldest month first, current month last."""

        require_capability(current_roles, Capability.AUTHENTICATED)
        window = datetime_utils.month_window(today or datetime_utils.today(), months)
        totals = {key: 0 for key in window}
        for p in self._payments.list_all().unwrap():
            paid_on = datetime_utils.coerce_date(p.get("paymentDate"))
            if paid_on is None:
                continue
            key = (paid_on.year, paid_on.month)
            if key in totals:
                totals[key] += _paid(p)
        return [
            {"name": f"{month:02d}/{year}", "year": year, "month": month, "amount": totals[(year, month)]}
            for year, month in window
        ]

    def accountant_summary(self, *, current_roles: Set[Role]) -> AccountantSummary:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        data = self._gather(
            payments=self._payments.list_all,
            fees=lambda: self._fees.list_all(showAll="true"),
        )
        payments, fees = data["payments"], data["fees"]
        fee_types = {f.get("id"): f.get("type") for f in fees}

        verified = sum(1 for p in payments if p.get("verified"))
        mandatory = sum(_paid(p) for p in payments if fee_types.get(p.get("feeId")) == FeeType.MANDATORY.value)
        voluntary = sum(_paid(p) for p in payments if fee_types.get(p.get("feeId")) == FeeType.VOLUNTARY.value)
        return AccountantSummary(
            total_fees=len(fees),
            total_payments=len(payments),
            total_collected=sum(_paid(p) for p in payments),
            total_mandatory_collected=mandatory,
            total_voluntary_collected=voluntary,
            verified_payments=verified,
            unverified_payments=len(payments) - verified,
            verification_rate=percentage(verified, len(payments)),
            mandatory_fees=sum(1 for f in fees if f.get("type") == FeeType.MANDATORY.value),
            voluntary_fees=sum(1 for f in fees if f.get("type") == FeeType.VOLUNTARY.value),
        )

    def to_truong_summary(self, *, current_roles: Set[Role]) -> ToTruongSummary:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        data = self._gather(
            households=lambda: self._households.list_all(showAll="true"),
            people=self._persons.list_all,
        )
        households, people = data["households"], data["people"]
        active = sum(1 for h in households if h.get("active"))

        buckets = []
        for name, low, high in MEMBER_BUCKETS:
            count = sum(
                1
                for h in households
                if h.get("numMembers", 0) >= low and (high is None or h.get("numMembers", 0) <= high)
            )
            buckets.append({"name": name, "count": count})

        average = round(len(people) / len(households), 2) if households else 0
        return ToTruongSummary(
            total_households=len(households),
            active_households=active,
            inactive_households=len(households) - active,
            total_people=len(people),
            average_people_per_household=average,
            household_member_data=buckets,
            households_with_phone_number=sum(1 for h in households if h.get("phoneNumber")),
            households_with_email=sum(1 for h in households if h.get("email")),
        )

    def recent_households(self, *, current_roles: Set[Role], limit: int = DEFAULT_RECENT_LIMIT) -> list[dict]:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        households = self._households.list_all(showAll="true").unwrap()
        ordered = sorted(
            households,
            key=lambda h: datetime_utils.coerce_date(h.get("ngayLamHoKhau")) or date.min,
            reverse=True,
        )
        return ordered[: max(limit, 0)]
