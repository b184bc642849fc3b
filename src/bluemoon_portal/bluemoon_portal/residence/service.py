from __future__ import annotations

from collections.abc import Set
from typing import Any, Mapping, Optional

from ..auth.capabilities import Capability, require_capability
from ..common.result import FetchResult
from ..common.validators import require_id, require_non_empty
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import ResidenceStatus, Role
from ..core.exceptions import ValidationError
from ..mapping.entities import TEMPORARY_RESIDENCE
from .repository import TemporaryResidenceRepository


class TemporaryResidenceService:
    def __init__(self, records: TemporaryResidenceRepository):
        self._records = records

    def list_records(
        self,
        *,
        current_roles: Set[Role],
        person_id: Optional[int] = None,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> FetchResult:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        if person_id is not None:
            return self._records.list_by_person(require_id(person_id, "Nhân khẩu"))
        if page < 0 or size <= 0:
            raise ValidationError("Phân trang không hợp lệ")
        return self._records.list_page(page=page, size=size)

    def get_record(self, *, current_roles: Set[Role], record_id: int) -> dict:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        record = self._records.get(require_id(record_id, "Mã đăng ký"))
        if not record:
            raise ValidationError("Bản ghi tạm trú/tạm vắng không tồn tại")
        return record

    @staticmethod
    def _build(data: Mapping[str, Any]) -> dict:
        record = TEMPORARY_RESIDENCE.normalize(data)
        status = str(record["status"]).strip().upper()
        if status not in ResidenceStatus.__members__:
            raise ValidationError("Trạng thái phải là TAM_TRU hoặc TAM_VANG")
        record["status"] = status
        record["personId"] = require_id(record["personId"], "Nhân khẩu")
        record["address"] = require_non_empty(record["address"], "Địa chỉ tạm trú/tạm vắng")
        if not record["date"]:
            raise ValidationError("Thời gian không hợp lệ")
        return record

    def create_record(self, *, current_roles: Set[Role], data: Mapping[str, Any]) -> Optional[dict]:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        record = self._build(data)
        record["id"] = None
        return self._records.create(record)

    def update_record(self, *, current_roles: Set[Role], record_id: int, data: Mapping[str, Any]) -> Optional[dict]:
        existing = self.get_record(current_roles=current_roles, record_id=record_id)
        record = self._build({**existing, **dict(data)})
        record["id"] = existing["id"]
        return self._records.update(existing["id"], record)

    def delete_record(self, *, current_roles: Set[Role], record_id: int) -> None:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        self._records.delete(require_id(record_id, "Mã đăng ký"))
