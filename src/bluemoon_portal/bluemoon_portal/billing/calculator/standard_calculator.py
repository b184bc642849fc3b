from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Optional

from .base import MonthlyFeeCalculator
from ...core.constants import MONTHLY_PARKING_FEES
from ...core.enums import VehicleType


def _amount(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


class StandardMonthlyFeeCalculator(MonthlyFeeCalculator):
    """Standard rule: flat parking rate per vehicle type plus the sum of utility bills, not below 0."""

    def __init__(self, parking_rates: Optional[Mapping[VehicleType, float]] = None):
        self._rates = dict(parking_rates or MONTHLY_PARKING_FEES)

    def rate_for(self, vehicle_type) -> float:
        try:
            return self._rates.get(VehicleType(vehicle_type), 0)
        except ValueError:
            return 0

    def parking_fee(self, vehicles: Iterable[Mapping]) -> float:
        total = sum(self.rate_for(v.get("vehicleType")) for v in vehicles)
        return max(total, 0)

    def utility_fee(self, bills: Iterable[Mapping]) -> float:
        total = sum(_amount(b.get("amount")) for b in bills)
        return max(total, 0)
