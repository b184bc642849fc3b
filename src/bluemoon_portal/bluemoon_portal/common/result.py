from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..core.exceptions import ApiError


@dataclass(frozen=True)
class FetchError:
    message: str
    status: Optional[int] = None


@dataclass(frozen=True)
class FetchResult:
    """Outcome of loading a collection from the server.

    An empty ``items`` list with no ``error`` means the server answered with no
    content; a set ``error`` means the load failed and ``items`` is meaningless.
    """

    items: list = field(default_factory=list)
    error: Optional[FetchError] = None

    @classmethod
    def success(cls, items) -> "FetchResult":
        return cls(items=list(items or []))

    @classmethod
    def failure(cls, error: ApiError | str, status: Optional[int] = None) -> "FetchResult":
        if isinstance(error, ApiError):
            return cls(error=FetchError(message=str(error), status=error.status))
        return cls(error=FetchError(message=str(error), status=status))

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def is_empty(self) -> bool:
        return self.ok and not self.items

    def map(self, fn: Callable[[Any], Any]) -> "FetchResult":
        if self.failed:
            return self
        return FetchResult(items=[fn(item) for item in self.items])

    def unwrap(self) -> list:
        """Return the items or raise ApiError if the load failed."""

        if self.error is not None:
            raise ApiError(self.error.message, status=self.error.status)
        return list(self.items)
