from __future__ import annotations

from src.bluemoon_portal.bluemoon_portal.api.base_repository import ApiResourceRepository
from src.bluemoon_portal.bluemoon_portal.core.exceptions import ApiError
from src.bluemoon_portal.bluemoon_portal.mapping.entities import HOUSEHOLD


class FakeClient:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def get(self, path, *, params=None):
        self.calls.append(("GET", path, params))
        if self.error is not None:
            raise self.error
        return self.payload

    def post(self, path, json=None, *, params=None):
        self.calls.append(("POST", path, json))
        return json

    def put(self, path, json=None, *, params=None):
        self.calls.append(("PUT", path, json))
        return json

    def delete(self, path, *, params=None):
        self.calls.append(("DELETE", path, params))


class HouseholdResource(ApiResourceRepository):
    resource = "/ho-khau"
    mapping = HOUSEHOLD


def test_list_maps_records_and_drops_blank_filters():
    client = FakeClient([{"id": 1, "chuHo": "A", "hoatDong": True}, "junk"])

    result = HouseholdResource(client).list_all(showAll="true", q="", page=None)

    assert client.calls == [("GET", "/ho-khau", {"showAll": "true"})]
    assert result.ok
    assert [h["ownerName"] for h in result.items] == ["A"]


def test_shape_mismatch_is_empty_not_failed():
    result = HouseholdResource(FakeClient("unexpected")).list_all()

    assert result.ok
    assert result.items == []


def test_load_error_is_a_failed_result():
    result = HouseholdResource(FakeClient(error=ApiError("down", status=502))).list_all()

    assert result.failed
    assert result.error.status == 502


def test_create_sends_wire_record():
    client = FakeClient()

    created = HouseholdResource(client).create({"ownerName": "B", "active": True})

    method, path, body = client.calls[0]
    assert (method, path) == ("POST", "/ho-khau")
    assert body["chuHo"] == "B"
    assert body["hoatDong"] is True
    assert created["ownerName"] == "B"


def test_update_and_delete_use_record_path():
    client = FakeClient()
    repo = HouseholdResource(client)

    repo.update(5, {"ownerName": "C"})
    repo.delete(5)

    assert [(m, p) for m, p, _ in client.calls] == [("PUT", "/ho-khau/5"), ("DELETE", "/ho-khau/5")]


def test_message_object_is_no_data():
    result = HouseholdResource(FakeClient({"message": "Không có dữ liệu"})).list_all()

    assert result.ok
    assert result.items == []


def test_single_record_object_is_wrapped():
    result = HouseholdResource(FakeClient({"id": 4, "chuHo": "D"})).list_all()

    assert [h["ownerName"] for h in result.items] == ["D"]
