"""Fill missing household/fee display fields on payment records.

The server only embeds the full household and fee objects the first time they
appear in a response; later payments carry bare ids. Display fields are
recovered from other payments in the same list, then from the household and
fee lists when the caller has them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def _household_info(payments: Iterable[Mapping], households: Iterable[Mapping]) -> dict:
    info: dict = {}
    for h in households:
        if h.get("id") is not None:
            info[h["id"]] = {
                "householdOwnerName": h.get("ownerName") or "",
                "householdAddress": h.get("address") or "",
                "soHoKhau": h.get("soHoKhau") or "",
            }
    for p in payments:
        if p.get("householdId") is not None and p.get("householdOwnerName"):
            info[p["householdId"]] = {
                "householdOwnerName": p["householdOwnerName"],
                "householdAddress": p.get("householdAddress") or "",
                "soHoKhau": p.get("soHoKhau") or "",
            }
    return info


def _fee_info(payments: Iterable[Mapping], fees: Iterable[Mapping]) -> dict:
    info: dict = {}
    for f in fees:
        if f.get("id") is not None:
            info[f["id"]] = {"feeName": f.get("name") or "", "feeAmount": f.get("amount") or 0}
    for p in payments:
        if p.get("feeId") is not None and p.get("feeName"):
            info[p["feeId"]] = {"feeName": p["feeName"], "feeAmount": p.get("feeAmount") or 0}
    return info


def enrich_payments(
    payments: Iterable[Mapping],
    *,
    households: Iterable[Mapping] = (),
    fees: Iterable[Mapping] = (),
) -> list[dict]:
    payments = [dict(p) for p in payments]
    households_by_id = _household_info(payments, households)
    fees_by_id = _fee_info(payments, fees)

    out: list[dict] = []
    for p in payments:
        household = households_by_id.get(p.get("householdId"))
        if household and (not p.get("householdOwnerName") or not p.get("householdAddress")):
            p.update(household)
        fee = fees_by_id.get(p.get("feeId"))
        if fee and not p.get("feeName"):
            p.update(fee)
        out.append(p)
    return out
