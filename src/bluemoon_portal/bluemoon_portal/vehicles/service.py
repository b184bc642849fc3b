from __future__ import annotations

from collections.abc import Set
from typing import Any, Mapping, Optional

from ..auth.capabilities import Capability, require_capability
from ..billing.calculator.base import MonthlyFeeCalculator
from ..billing.calculator.standard_calculator import StandardMonthlyFeeCalculator
from ..common.result import FetchResult
from ..common.validators import require_id, require_non_empty
from ..core.enums import Role, VehicleType
from ..core.exceptions import ValidationError
from ..mapping.entities import VEHICLE
from .repository import VehicleRepository


class VehicleService:
    def __init__(self, vehicles: VehicleRepository, *, calculator: Optional[MonthlyFeeCalculator] = None):
        self._vehicles = vehicles
        self._calculator = calculator or StandardMonthlyFeeCalculator()

    def list_vehicles(
        self,
        *,
        current_roles: Set[Role],
        household_id: Optional[int] = None,
        term: str = "",
    ) -> FetchResult:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        term = (term or "").strip()
        if term:
            return self._vehicles.search(term=term)
        if household_id is not None:
            return self._vehicles.list_by_household(require_id(household_id, "Mã hộ khẩu"))
        return self._vehicles.list_all()

    def get_vehicle(self, *, current_roles: Set[Role], vehicle_id: int) -> dict:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        vehicle = self._vehicles.get(require_id(vehicle_id, "Mã phương tiện"))
        if not vehicle:
            raise ValidationError("Phương tiện không tồn tại")
        return vehicle

    def _build(self, data: Mapping[str, Any], *, vehicle_id: Optional[int]) -> dict:
        record = VEHICLE.normalize(data)
        plate = require_non_empty(record["licensePlate"], "Biển số xe").upper()
        if record["vehicleType"] not in VehicleType.__members__:
            raise ValidationError("Loại xe không hợp lệ")
        record["householdId"] = require_id(record["householdId"], "Hộ khẩu")
        if not self._vehicles.is_plate_unique(plate, exclude_id=vehicle_id):
            raise ValidationError(f"Biển số xe {plate} đã được đăng ký")
        record["licensePlate"] = plate
        record["id"] = vehicle_id
        return record

    def create_vehicle(self, *, current_roles: Set[Role], data: Mapping[str, Any]) -> Optional[dict]:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        return self._vehicles.create(self._build(data, vehicle_id=None))

    def update_vehicle(self, *, current_roles: Set[Role], vehicle_id: int, data: Mapping[str, Any]) -> Optional[dict]:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        vehicle_id = require_id(vehicle_id, "Mã phương tiện")
        return self._vehicles.update(vehicle_id, self._build(data, vehicle_id=vehicle_id))

    def delete_vehicle(self, *, current_roles: Set[Role], vehicle_id: int) -> None:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        self._vehicles.delete(require_id(vehicle_id, "Mã phương tiện"))

    def monthly_parking_fee(self, *, current_roles: Set[Role], household_id: int) -> float:
        """Phí gửi xe hàng tháng của một hộ; lỗi tải danh sách xe được ném ra dưới dạng ApiError."""

        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        vehicles = self._vehicles.list_by_household(require_id(household_id, "Mã hộ khẩu")).unwrap()
        return self._calculator.parking_fee(vehicles)
