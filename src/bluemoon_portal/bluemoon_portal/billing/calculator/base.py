from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping


class MonthlyFeeCalculator(ABC):
    """Calculator interface (Strategy Pattern for monthly household fees)."""

    @abstractmethod
    def parking_fee(self, vehicles: Iterable[Mapping]) -> float:
        raise NotImplementedError

    @abstractmethod
    def utility_fee(self, bills: Iterable[Mapping]) -> float:
        raise NotImplementedError

    def total(self, vehicles: Iterable[Mapping], bills: Iterable[Mapping]) -> float:
        return self.parking_fee(vehicles) + self.utility_fee(bills)
