from __future__ import annotations

import pytest

from src.bluemoon_portal.bluemoon_portal.core.enums import Role
from src.bluemoon_portal.bluemoon_portal.core.exceptions import ApiError, ValidationError
from src.bluemoon_portal.bluemoon_portal.vehicles.api_vehicle_repository import ApiVehicleRepository
from src.bluemoon_portal.bluemoon_portal.vehicles.service import VehicleService

TO_TRUONG = frozenset({Role.TO_TRUONG})


class FakeClient:
    def __init__(self, *, taken=(), by_household=None, error=None):
        self.taken = set(taken)
        self.by_household = by_household or {}
        self.error = error
        self.calls = []

    def get(self, path, *, params=None):
        self.calls.append(("GET", path, params))
        if self.error is not None:
            raise self.error
        if path.endswith("check-license-plate"):
            return {"isUnique": params["bienSoXe"] not in self.taken}
        if "/household/" in path:
            return self.by_household.get(int(path.rsplit("/", 1)[-1]), [])
        return []

    def post(self, path, json=None, *, params=None):
        self.calls.append(("POST", path, json))
        return json

    def put(self, path, json=None, *, params=None):
        self.calls.append(("PUT", path, json))
        return json


def test_plate_is_normalized_and_checked():
    client = FakeClient()

    VehicleService(ApiVehicleRepository(client)).create_vehicle(
        current_roles=TO_TRUONG,
        data={"licensePlate": " 29a-123.45 ", "vehicleType": "XE_MAY", "householdId": 3},
    )

    assert client.calls[0] == ("GET", "/vehicles/check-license-plate", {"bienSoXe": "29A-123.45"})
    assert client.calls[1][2]["bienSoXe"] == "29A-123.45"
    assert client.calls[1][2]["hoKhauId"] == 3


def test_registered_plate_rejected():
    service = VehicleService(ApiVehicleRepository(FakeClient(taken={"30F-999.99"})))

    with pytest.raises(ValidationError, match="30F-999.99"):
        service.create_vehicle(
            current_roles=TO_TRUONG,
            data={"licensePlate": "30F-999.99", "vehicleType": "O_TO", "householdId": 1},
        )


def test_update_excludes_own_record_from_check():
    client = FakeClient()

    VehicleService(ApiVehicleRepository(client)).update_vehicle(
        current_roles=TO_TRUONG,
        vehicle_id=4,
        data={"licensePlate": "29A-1", "vehicleType": "XE_DIEN", "householdId": 1},
    )

    assert client.calls[0][2] == {"bienSoXe": "29A-1", "vehicleId": 4}
    assert client.calls[1][:2] == ("PUT", "/vehicles/4")


@pytest.mark.parametrize(
    "data",
    [
        {"licensePlate": "", "vehicleType": "XE_MAY", "householdId": 1},
        {"licensePlate": "29A-1", "vehicleType": "TAU", "householdId": 1},
        {"licensePlate": "29A-1", "vehicleType": "XE_MAY"},
    ],
)
def test_invalid_vehicle(data):
    with pytest.raises(ValidationError):
        VehicleService(ApiVehicleRepository(FakeClient())).create_vehicle(current_roles=TO_TRUONG, data=data)


def test_monthly_parking_fee():
    client = FakeClient(by_household={2: [{"loaiXe": "XE_MAY"}, {"loaiXe": "XE_DIEN"}]})

    fee = VehicleService(ApiVehicleRepository(client)).monthly_parking_fee(current_roles=TO_TRUONG, household_id=2)

    assert fee == 120000


def test_monthly_parking_fee_load_error():
    service = VehicleService(ApiVehicleRepository(FakeClient(error=ApiError("down"))))

    with pytest.raises(ApiError):
        service.monthly_parking_fee(current_roles=TO_TRUONG, household_id=2)
