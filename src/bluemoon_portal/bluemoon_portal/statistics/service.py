from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass
from datetime import date

from ..core.enums import Role
from ..payments.service import PaymentService


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


REPORT_COLUMNS = (
    "payment_date",
    "payment_id",
    "so_ho_khau",
    "owner_name",
    "fee_name",
    "amount",
    "amount_paid",
    "verified",
    "notes",
)


class StatisticsService:
    def __init__(self, payments: PaymentService):
        self._payments = payments

    def build_payment_report(self, *, current_roles: Set[Role], start: date, end: date) -> ReportData:
        """Payment rows in the period plus one collected-total line per fee, largest first."""

        payments = self._payments.list_between(current_roles=current_roles, start=start, end=end).unwrap()

        out_rows: list[dict] = []
        summary_map: dict = {}
        for p in payments:
            out_rows.append(
                {
                    "payment_date": p.get("paymentDate") or "",
                    "payment_id": p.get("id"),
                    "so_ho_khau": p.get("soHoKhau") or "-",
                    "owner_name": p.get("householdOwnerName") or "-",
                    "fee_name": p.get("feeName") or "-",
                    "amount": p.get("amount") or 0,
                    "amount_paid": p.get("amountPaid") or 0,
                    "verified": bool(p.get("verified")),
                    "notes": p.get("notes") or "",
                }
            )

            s = summary_map.get(p.get("feeId"))
            if not s:
                s = {
                    "fee_id": p.get("feeId"),
                    "fee_name": p.get("feeName") or "-",
                    "total_payments": 0,
                    "verified_payments": 0,
                    "total_collected": 0,
                }
                summary_map[p.get("feeId")] = s
            s["total_payments"] += 1
            s["verified_payments"] += 1 if p.get("verified") else 0
            s["total_collected"] += p.get("amountPaid") or 0

        summary = sorted(summary_map.values(), key=lambda x: x["total_collected"], reverse=True)
        out_rows.sort(key=lambda r: r["payment_date"])
        return ReportData(rows=out_rows, summary=summary)
