from __future__ import annotations

import pytest

from src.bluemoon_portal.bluemoon_portal.common.result import FetchResult
from src.bluemoon_portal.bluemoon_portal.core.enums import Role
from src.bluemoon_portal.bluemoon_portal.core.exceptions import AuthorizationError, ValidationError
from src.bluemoon_portal.bluemoon_portal.utilities.service import UtilityService

ADMIN = frozenset({Role.ADMIN})


class InMemoryUtilityBillRepository:
    def __init__(self, bills=None):
        self.bills = {b["id"]: dict(b) for b in (bills or [])}
        self.calls = []

    def list_all(self, **filters):
        self.calls.append(("all",))
        return FetchResult.success(self.bills.values())

    def list_by_household(self, household_id):
        self.calls.append(("household", household_id))
        return FetchResult.success([])

    def list_for_month(self, household_id, *, month, year):
        self.calls.append(("month", household_id, month, year))
        return FetchResult.success([])

    def list_unpaid(self):
        self.calls.append(("unpaid",))
        return FetchResult.success([])

    def get(self, bill_id):
        return self.bills.get(bill_id)

    def create(self, record):
        return {**record, "id": 30}

    def update(self, bill_id, record):
        self.bills[bill_id] = dict(record)
        return record

    def set_paid(self, bill_id, *, paid):
        self.calls.append(("paid", bill_id, paid))

    def delete(self, bill_id):
        self.bills.pop(bill_id, None)


VALID = {"serviceType": "DIEN", "householdId": 1, "month": 5, "year": 2026, "amount": 350000, "oldReading": 100, "newReading": 250}


def test_list_dispatch():
    repo = InMemoryUtilityBillRepository()
    service = UtilityService(repo)

    service.list_bills(current_roles=ADMIN)
    service.list_bills(current_roles=ADMIN, household_id=1)
    service.list_bills(current_roles=ADMIN, household_id=1, month="5", year="2026")
    service.list_bills(current_roles=ADMIN, unpaid=True)

    assert repo.calls == [("all",), ("household", 1), ("month", 1, 5, 2026), ("unpaid",)]


def test_create_bill():
    created = UtilityService(InMemoryUtilityBillRepository()).create_bill(current_roles=ADMIN, data=VALID)

    assert created["id"] == 30
    assert created["amount"] == 350000


@pytest.mark.parametrize(
    "overrides",
    [{"serviceType": "GAS"}, {"month": 13}, {"year": 1999}, {"amount": -1}, {"newReading": 50}, {"householdId": 0}],
)
def test_invalid_bill(overrides):
    with pytest.raises(ValidationError):
        UtilityService(InMemoryUtilityBillRepository()).create_bill(current_roles=ADMIN, data={**VALID, **overrides})


def test_update_merges_existing():
    repo = InMemoryUtilityBillRepository([{**VALID, "id": 4}])

    UtilityService(repo).update_bill(current_roles=ADMIN, bill_id=4, data={"amount": 400000})

    assert repo.bills[4]["amount"] == 400000
    assert repo.bills[4]["serviceType"] == "DIEN"


def test_set_paid_and_total():
    repo = InMemoryUtilityBillRepository()
    service = UtilityService(repo)

    service.set_paid(current_roles=ADMIN, bill_id=4, paid=True)

    assert repo.calls == [("paid", 4, True)]
    assert service.total_cost([{"amount": 100}, {"amount": 250}]) == 350


def test_accountant_cannot_manage_bills():
    with pytest.raises(AuthorizationError):
        UtilityService(InMemoryUtilityBillRepository()).list_bills(current_roles=frozenset({Role.KE_TOAN}))
