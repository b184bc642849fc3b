from __future__ import annotations

import pytest

from src.bluemoon_portal.bluemoon_portal.common.result import FetchResult
from src.bluemoon_portal.bluemoon_portal.core.enums import Role
from src.bluemoon_portal.bluemoon_portal.core.exceptions import AuthorizationError, ValidationError
from src.bluemoon_portal.bluemoon_portal.households.service import HouseholdService

ADMIN = frozenset({Role.ADMIN})
TO_TRUONG = frozenset({Role.TO_TRUONG})
KE_TOAN = frozenset({Role.KE_TOAN})


class InMemoryHouseholdRepository:
    def __init__(self, households=None):
        self.households = {h["id"]: dict(h) for h in (households or [])}
        self.members = []
        self.activated = []
        self.list_filters = []

    def list_all(self, **filters):
        self.list_filters.append(filters)
        return FetchResult.success(self.households.values())

    def search(self, *, keyword):
        return FetchResult.success(h for h in self.households.values() if keyword in h["ownerName"])

    def get(self, household_id):
        return self.households.get(household_id)

    def create(self, record):
        created = {**record, "id": len(self.households) + 1}
        self.households[created["id"]] = created
        return created

    def update(self, household_id, record):
        self.households[household_id] = dict(record)
        return record

    def delete(self, household_id):
        self.households.pop(household_id, None)

    def activate(self, household_id):
        self.activated.append(household_id)

    def list_members(self, household_id):
        return FetchResult.success([])

    def add_member(self, household_id, member):
        self.members.append((household_id, member))

    def remove_member(self, household_id, person_id, *, notes=None):
        self.members = [m for m in self.members if m[1]["personId"] != person_id]

    def list_history(self, household_id):
        return FetchResult.success([])


@pytest.fixture()
def repo():
    return InMemoryHouseholdRepository(
        [{"id": 1, "ownerName": "Nguyễn Văn A", "soHoKhau": "HK001", "numMembers": 3, "active": True}]
    )


@pytest.fixture()
def service(repo):
    return HouseholdService(repo)


def test_to_truong_registration_stays_inactive(service, repo):
    created = service.create_household(
        current_roles=TO_TRUONG,
        data={"ownerName": "Trần Thị B", "soHoKhau": "HK002", "numMembers": "2", "active": True},
    )

    assert created["active"] is False
    assert created["numMembers"] == 2
    assert created["id"] == 2


def test_admin_registration_is_active(service):
    created = service.create_household(current_roles=ADMIN, data={"ownerName": "C", "soHoKhau": "HK003"})

    assert created["active"] is True
    assert created["numMembers"] == 1


def test_accountant_cannot_touch_households(service):
    with pytest.raises(AuthorizationError):
        service.list_households(current_roles=KE_TOAN)
    with pytest.raises(AuthorizationError):
        service.create_household(current_roles=KE_TOAN, data={"ownerName": "D", "soHoKhau": "HK004"})


@pytest.mark.parametrize(
    "data",
    [
        {"ownerName": "", "soHoKhau": "HK005"},
        {"ownerName": "E", "soHoKhau": "  "},
        {"ownerName": "E", "soHoKhau": "HK005", "numMembers": 0},
    ],
)
def test_invalid_household(service, data):
    with pytest.raises(ValidationError):
        service.create_household(current_roles=ADMIN, data=data)


def test_to_truong_update_keeps_active_flag(service, repo):
    repo.households[1]["active"] = False

    service.update_household(
        current_roles=TO_TRUONG,
        household_id=1,
        data={"ownerName": "Nguyễn Văn A", "soHoKhau": "HK001", "active": "true"},
    )

    assert repo.households[1]["active"] is False


def test_only_admin_activates_or_deletes(service, repo):
    with pytest.raises(AuthorizationError):
        service.activate_household(current_roles=TO_TRUONG, household_id=1)
    with pytest.raises(AuthorizationError):
        service.delete_household(current_roles=TO_TRUONG, household_id=1)

    service.activate_household(current_roles=ADMIN, household_id=1)
    service.delete_household(current_roles=ADMIN, household_id=1)

    assert repo.activated == [1]
    assert repo.households == {}


def test_show_all_passes_filter(service, repo):
    service.list_households(current_roles=ADMIN, show_all=True)
    service.list_households(current_roles=ADMIN)

    assert repo.list_filters == [{"showAll": "true"}, {"showAll": None}]


def test_add_member_requires_relationship(service, repo):
    with pytest.raises(ValidationError):
        service.add_member(current_roles=TO_TRUONG, household_id=1, person_id=5, relationship=" ")

    service.add_member(current_roles=TO_TRUONG, household_id=1, person_id="5", relationship="Con")

    assert repo.members == [(1, {"personId": 5, "relationshipWithOwner": "Con", "notes": ""})]


def test_search_requires_keyword(service):
    with pytest.raises(ValidationError):
        service.search(current_roles=ADMIN, keyword="")
    assert [h["id"] for h in service.search(current_roles=ADMIN, keyword="Văn").items] == [1]
