from __future__ import annotations

from src.bluemoon_portal.bluemoon_portal.payments.enrichment import enrich_payments


def test_later_payments_borrow_fields_from_earlier_ones():
    payments = [
        {"id": 1, "householdId": 4, "householdOwnerName": "Lê A", "householdAddress": "P101", "feeId": 2, "feeName": "Phí vệ sinh"},
        {"id": 2, "householdId": 4, "feeId": 2},
    ]

    enriched = enrich_payments(payments)

    assert enriched[1]["householdOwnerName"] == "Lê A"
    assert enriched[1]["householdAddress"] == "P101"
    assert enriched[1]["feeName"] == "Phí vệ sinh"


def test_lookup_lists_fill_the_rest():
    enriched = enrich_payments(
        [{"id": 1, "householdId": 7, "feeId": 3}],
        households=[{"id": 7, "ownerName": "Phạm B", "address": "P707", "soHoKhau": "HK007"}],
        fees=[{"id": 3, "name": "Quỹ khuyến học", "amount": 50000}],
    )

    assert enriched[0]["householdOwnerName"] == "Phạm B"
    assert enriched[0]["soHoKhau"] == "HK007"
    assert enriched[0]["feeName"] == "Quỹ khuyến học"
    assert enriched[0]["feeAmount"] == 50000


def test_unknown_references_left_alone_and_input_untouched():
    original = {"id": 1, "householdId": 9, "feeId": 9}

    enriched = enrich_payments([original], households=[{"id": 1, "ownerName": "X"}])

    assert "householdOwnerName" not in enriched[0]
    assert original == {"id": 1, "householdId": 9, "feeId": 9}
    assert enriched[0] is not original
