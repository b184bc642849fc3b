from __future__ import annotations

from collections.abc import Set
from typing import Any, Mapping, Optional

from ..auth.capabilities import Action, Capability, can_perform, require_action, require_capability
from ..common import datetime_utils
from ..common.result import FetchResult
from ..common.validators import parse_flag, require_id, require_non_empty, require_non_negative
from ..core.enums import FeeType, Role
from ..core.exceptions import ValidationError
from ..mapping.entities import FEE
from .repository import FeeRepository


class FeeService:
    def __init__(self, fees: FeeRepository):
        self._fees = fees

    def list_fees(self, *, current_roles: Set[Role], fee_type: Optional[FeeType] = None) -> FetchResult:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        if fee_type is not None:
            return self._fees.list_by_type(mandatory=fee_type is FeeType.MANDATORY)
        # inactive fees are listed too; the view shows their status
        return self._fees.list_all(showAll="true")

    def get_fee(self, *, current_roles: Set[Role], fee_id: int) -> dict:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        fee = self._fees.get(require_id(fee_id, "Mã khoản thu"))
        if not fee:
            raise ValidationError("Khoản thu không tồn tại")
        return fee

    @staticmethod
    def _build(data: Mapping[str, Any]) -> dict:
        raw = dict(data)
        if isinstance(raw.get("type"), str):
            raw["type"] = raw["type"].strip().upper()
        require_non_negative(raw.get("amount"), "Số tiền")
        record = FEE.normalize(raw)
        record["name"] = require_non_empty(record["name"], "Tên khoản thu")
        if datetime_utils.coerce_date(record["dueDate"]) is None:
            raise ValidationError("Thời hạn nộp không hợp lệ")
        if not record["ngayTao"]:
            record["ngayTao"] = datetime_utils.today().isoformat()
        return record

    def create_fee(self, *, current_roles: Set[Role], data: Mapping[str, Any]) -> Optional[dict]:
        """Create a fee; fees created by non-admins wait for admin approval."""

        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        record = self._build(data)
        record["id"] = None
        if can_perform(current_roles, Action.APPROVE_ON_CREATE):
            record["active"] = parse_flag(data.get("active"), default=True)
        else:
            record["active"] = False
        return self._fees.create(record)

    def update_fee(self, *, current_roles: Set[Role], fee_id: int, data: Mapping[str, Any]) -> Optional[dict]:
        require_action(current_roles, Action.EDIT_FEE)
        existing = self.get_fee(current_roles=current_roles, fee_id=fee_id)
        record = self._build({**existing, **dict(data)})
        record["id"] = existing["id"]
        record["active"] = parse_flag(data.get("active"), default=existing["active"])
        return self._fees.update(existing["id"], record)

    def toggle_status(self, *, current_roles: Set[Role], fee_id: int, active: bool) -> None:
        require_action(current_roles, Action.TOGGLE_FEE_STATUS)
        self._fees.set_status(require_id(fee_id, "Mã khoản thu"), active=bool(active))

    def delete_fee(self, *, current_roles: Set[Role], fee_id: int) -> None:
        require_action(current_roles, Action.DELETE_FEE)
        self._fees.delete(require_id(fee_id, "Mã khoản thu"))

    def statistics(self, *, current_roles: Set[Role], fee_id: int) -> dict:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        return self._fees.statistics(require_id(fee_id, "Mã khoản thu"))

    def paid_households(self, *, current_roles: Set[Role], fee_id: int) -> dict:
        require_capability(current_roles, Capability.FEE_MANAGEMENT)
        return self._fees.paid_households(require_id(fee_id, "Mã khoản thu"))
