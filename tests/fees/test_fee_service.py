from __future__ import annotations

from datetime import date

import pytest

from src.bluemoon_portal.bluemoon_portal.common import datetime_utils
from src.bluemoon_portal.bluemoon_portal.core.enums import FeeType, Role
from src.bluemoon_portal.bluemoon_portal.core.exceptions import AuthorizationError, ValidationError
from src.bluemoon_portal.bluemoon_portal.fees.api_fee_repository import ApiFeeRepository
from src.bluemoon_portal.bluemoon_portal.fees.service import FeeService

ADMIN = frozenset({Role.ADMIN})
KE_TOAN = frozenset({Role.KE_TOAN})
TO_TRUONG = frozenset({Role.TO_TRUONG})


class FakeClient:
    """Answers like the REST server for /fees and records every call."""

    def __init__(self, fees=None):
        self.fees = {f["id"]: f for f in (fees or [])}
        self.calls = []

    def get(self, path, *, params=None):
        self.calls.append(("GET", path, params))
        if path == "/fees":
            return list(self.fees.values())
        if path.startswith("/fees/bat-buoc/"):
            mandatory = path.endswith("true")
            return [f for f in self.fees.values() if f.get("batBuoc") is mandatory]
        fee_id = int(path.rsplit("/", 1)[-1])
        return self.fees.get(fee_id)

    def post(self, path, json=None, *, params=None):
        self.calls.append(("POST", path, json))
        return {**json, "id": 99}

    def put(self, path, json=None, *, params=None):
        self.calls.append(("PUT", path, json))
        return json

    def patch(self, path, json=None, *, params=None):
        self.calls.append(("PATCH", path, json))

    def delete(self, path, *, params=None):
        self.calls.append(("DELETE", path, params))


@pytest.fixture()
def client():
    return FakeClient(
        [
            {"id": 1, "tenKhoanThu": "Phí vệ sinh", "batBuoc": True, "soTien": 6000, "hoatDong": True,
             "thoiHan": "2026-06-30"},
            {"id": 2, "tenKhoanThu": "Quỹ khuyến học", "batBuoc": False, "soTien": 0, "hoatDong": False,
             "thoiHan": "2026-12-31"},
        ]
    )


@pytest.fixture()
def service(client):
    return FeeService(ApiFeeRepository(client))


def test_list_always_asks_for_inactive_fees(service, client):
    result = service.list_fees(current_roles=KE_TOAN)

    assert client.calls[0] == ("GET", "/fees", {"showAll": "true"})
    assert [f["active"] for f in result.items] == [True, False]


def test_list_by_type(service, client):
    result = service.list_fees(current_roles=ADMIN, fee_type=FeeType.MANDATORY)

    assert client.calls[0][1] == "/fees/bat-buoc/true"
    assert [f["name"] for f in result.items] == ["Phí vệ sinh"]


def test_to_truong_cannot_list_fees(service):
    with pytest.raises(AuthorizationError):
        service.list_fees(current_roles=TO_TRUONG)


def test_fee_created_by_accountant_waits_for_approval(service, client, monkeypatch):
    monkeypatch.setattr(datetime_utils, "today", lambda: date(2026, 5, 1))

    created = service.create_fee(
        current_roles=KE_TOAN,
        data={"name": "Phí thang máy", "type": "mandatory", "amount": "30000", "active": "on",
              "dueDate": "2026-05-31"},
    )

    _, path, body = client.calls[-1]
    assert path == "/fees"
    assert body["hoatDong"] is False
    assert body["batBuoc"] is True
    assert body["soTien"] == 30000
    assert body["ngayTao"] == "2026-05-01"
    assert created["id"] == 99


def test_fee_created_by_admin_is_active(service, client):
    service.create_fee(current_roles=ADMIN, data={"name": "Phí gửi xe", "amount": 100000, "dueDate": "2026-12-31"})

    assert client.calls[-1][2]["hoatDong"] is True


def test_fee_requires_name_and_non_negative_amount(service):
    with pytest.raises(ValidationError):
        service.create_fee(current_roles=ADMIN, data={"name": " ", "amount": 1, "dueDate": "2026-12-31"})
    with pytest.raises(ValidationError):
        service.create_fee(current_roles=ADMIN, data={"name": "Phí", "amount": -5, "dueDate": "2026-12-31"})


@pytest.mark.parametrize(
    "data",
    [
        {"name": "Phí", "amount": "abc", "dueDate": "2026-12-31"},
        {"name": "Phí", "dueDate": "2026-12-31"},
        {"name": "Phí", "amount": None, "dueDate": "2026-12-31"},
    ],
)
def test_fee_amount_must_be_a_number(service, client, data):
    with pytest.raises(ValidationError):
        service.create_fee(current_roles=ADMIN, data=data)

    assert not [call for call in client.calls if call[0] == "POST"]


@pytest.mark.parametrize("due", [None, "", "31/12/2026"])
def test_fee_requires_due_date(service, client, due):
    with pytest.raises(ValidationError):
        service.create_fee(current_roles=ADMIN, data={"name": "Phí", "amount": 1000, "dueDate": due})

    assert not [call for call in client.calls if call[0] == "POST"]


def test_update_keeps_existing_due_date(service, client):
    service.update_fee(current_roles=ADMIN, fee_id=2, data={"amount": "5000"})

    body = client.calls[-1][2]
    assert body["thoiHan"] == "2026-12-31"
    assert body["soTien"] == 5000


def test_accountant_cannot_edit_toggle_or_delete(service):
    with pytest.raises(AuthorizationError):
        service.update_fee(current_roles=KE_TOAN, fee_id=1, data={"amount": 1})
    with pytest.raises(AuthorizationError):
        service.toggle_status(current_roles=KE_TOAN, fee_id=1, active=False)
    with pytest.raises(AuthorizationError):
        service.delete_fee(current_roles=KE_TOAN, fee_id=1)


def test_toggle_sends_active_flag(service, client):
    service.toggle_status(current_roles=ADMIN, fee_id=2, active=True)

    assert client.calls[-1] == ("PATCH", "/fees/2/status", {"hoatDong": True})


def test_update_merges_existing_fee(service, client):
    service.update_fee(current_roles=ADMIN, fee_id=1, data={"amount": 7000})

    method, path, body = client.calls[-1]
    assert (method, path) == ("PUT", "/fees/1")
    assert body["tenKhoanThu"] == "Phí vệ sinh"
    assert body["soTien"] == 7000
    assert body["hoatDong"] is True


def test_missing_fee(service):
    with pytest.raises(ValidationError):
        service.get_fee(current_roles=ADMIN, fee_id=404)
