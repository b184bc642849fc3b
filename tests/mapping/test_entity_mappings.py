from __future__ import annotations

import pytest

from src.bluemoon_portal.bluemoon_portal.mapping.entities import (
    ALL_ENTITIES,
    FEE,
    HOUSEHOLD,
    PAYMENT,
    PERSON,
    TEMPORARY_RESIDENCE,
    UTILITY_BILL,
)
from src.bluemoon_portal.bluemoon_portal.mapping.fields import FieldKind


def test_fee_from_server():
    fee = FEE.to_canonical({"id": 3, "tenKhoanThu": "Phí vệ sinh", "batBuoc": True, "soTien": 6000, "hoatDong": True})

    assert fee["name"] == "Phí vệ sinh"
    assert fee["type"] == "MANDATORY"
    assert fee["amount"] == 6000
    assert fee["active"] is True
    assert fee["dueDate"] is None
    assert fee["description"] == ""


def test_fee_to_server():
    wire = FEE.to_wire({"name": "Quỹ khuyến học", "type": "VOLUNTARY", "amount": 50000, "active": False})

    assert wire["tenKhoanThu"] == "Quỹ khuyến học"
    assert wire["batBuoc"] is False
    assert wire["soTien"] == 50000
    assert wire["hoatDong"] is False


def test_household_missing_active_flag_is_inactive():
    household = HOUSEHOLD.to_canonical({"id": 1, "chuHo": "Nguyễn Văn A"})

    assert household["active"] is False
    assert household["numMembers"] == 1
    assert household["phoneNumber"] == ""


def test_flag_is_strict():
    assert HOUSEHOLD.to_canonical({"hoatDong": "true"})["active"] is False
    assert HOUSEHOLD.to_canonical({"hoatDong": 1})["active"] is False


def test_numeric_strings_are_parsed():
    assert FEE.to_canonical({"soTien": "15000"})["amount"] == 15000
    assert FEE.to_canonical({"soTien": "12.5"})["amount"] == 12.5
    assert FEE.to_canonical({"soTien": "abc"})["amount"] == 0
    assert FEE.to_canonical({"soTien": float("nan")})["amount"] == 0
    assert HOUSEHOLD.to_canonical({"soThanhVien": "4"})["numMembers"] == 4


def test_person_id_card_reads_backend_spelling_and_writes_both():
    person = PERSON.to_canonical({"hoTen": "Trần B", "cccd": "0123"})
    assert person["idCardNumber"] == "0123"

    wire = PERSON.to_wire(person)
    assert wire["soCMT"] == "0123"
    assert wire["cccd"] == "0123"


def test_payment_references_read_nested_or_flat():
    nested = PAYMENT.to_canonical({"hoKhau": {"id": 4, "chuHo": "A"}, "khoanThu": {"id": 9}})
    flat = PAYMENT.to_canonical({"hoKhauId": "4", "khoanThuId": 9})

    assert nested["householdId"] == flat["householdId"] == 4
    assert nested["feeId"] == flat["feeId"] == 9
    assert PAYMENT.to_wire(nested)["hoKhau"] == {"id": 4}


def test_temporary_residence_person_reference():
    record = TEMPORARY_RESIDENCE.to_canonical(
        {"id": 2, "trangThai": "TAM_TRU", "nhanKhau": {"id": 7, "hoTen": "Lê C"}, "thoiGian": "2026-03-01"}
    )

    assert record["personId"] == 7
    assert record["personName"] == "Lê C"
    assert TEMPORARY_RESIDENCE.to_wire(record)["nhanKhau"] == {"id": 7}


def test_utility_bill_total_alias():
    assert UTILITY_BILL.to_canonical({"tongTien": 120000})["amount"] == 120000


def test_input_is_not_mutated():
    raw = {"id": 1, "chuHo": "A", "hoKhau": {"id": 2}}
    snapshot = {"id": 1, "chuHo": "A", "hoKhau": {"id": 2}}

    HOUSEHOLD.to_canonical(raw)
    PAYMENT.to_canonical(raw)

    assert raw == snapshot


@pytest.mark.parametrize("mapping", ALL_ENTITIES, ids=lambda m: m.name)
def test_non_object_input_maps_to_none(mapping):
    assert mapping.to_canonical("oops") is None
    assert mapping.to_wire(None) is None


@pytest.mark.parametrize("mapping", ALL_ENTITIES, ids=lambda m: m.name)
def test_canonical_round_trip(mapping):
    record = mapping.to_canonical({})

    assert set(record) == set(mapping.canonical_keys)
    assert mapping.to_canonical(mapping.to_wire(record)) == record


def _populated(mapping):
    """A canonical record with a non-default, well-typed value in every field."""

    samples = {
        FieldKind.TEXT: lambda spec, i: f"{spec.canonical} {i}",
        FieldKind.FLAG: lambda spec, i: True,
        FieldKind.INTEGER: lambda spec, i: 10 + i,
        FieldKind.NUMBER: lambda spec, i: 1500.5 + i,
        FieldKind.REFERENCE: lambda spec, i: 100 + i,
        FieldKind.DATE: lambda spec, i: f"2026-03-{10 + i % 18:02d}",
        FieldKind.LABEL: lambda spec, i: spec.labels[0],
    }
    record = mapping.to_canonical({})
    for index, spec in enumerate(mapping.fields):
        record[spec.canonical] = samples[spec.kind](spec, index)
    return record


@pytest.mark.parametrize("mapping", ALL_ENTITIES, ids=lambda m: m.name)
def test_populated_canonical_round_trip(mapping):
    record = _populated(mapping)

    assert mapping.to_canonical(mapping.to_wire(record)) == record


def test_voluntary_fee_round_trip():
    fee = {
        "id": 12,
        "name": "Quỹ vì người nghèo",
        "type": "VOLUNTARY",
        "amount": 25000.5,
        "dueDate": "2026-11-30",
        "description": "Đóng góp tự nguyện",
        "active": True,
        "ngayTao": "2026-10-01",
    }

    wire = FEE.to_wire(fee)

    assert wire["batBuoc"] is False
    assert FEE.to_canonical(wire) == fee


def test_nested_references_round_trip():
    payment = {**PAYMENT.to_canonical({}), "id": 5, "householdId": 7, "feeId": 3, "amount": 90000.0, "verified": True}
    residence = {**TEMPORARY_RESIDENCE.to_canonical({}), "id": 2, "personId": 41, "personName": "Lê C"}

    payment_wire = PAYMENT.to_wire(payment)
    residence_wire = TEMPORARY_RESIDENCE.to_wire(residence)

    assert payment_wire["hoKhau"] == {"id": 7}
    assert payment_wire["khoanThu"] == {"id": 3}
    assert residence_wire["nhanKhau"] == {"id": 41}
    assert PAYMENT.to_canonical(payment_wire) == payment
    assert TEMPORARY_RESIDENCE.to_canonical(residence_wire) == residence
