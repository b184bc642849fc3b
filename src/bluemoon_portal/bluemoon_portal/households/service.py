from __future__ import annotations

from collections.abc import Set
from typing import Any, Mapping, Optional

from ..auth.capabilities import Action, Capability, can_perform, require_action, require_capability
from ..common.result import FetchResult
from ..common.validators import optional_text, parse_flag, require_id, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..mapping.entities import HOUSEHOLD
from .repository import HouseholdRepository


class HouseholdService:
    def __init__(self, households: HouseholdRepository):
        self._households = households

    def list_households(self, *, current_roles: Set[Role], show_all: bool = False) -> FetchResult:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        return self._households.list_all(showAll="true" if show_all else None)

    def search(self, *, current_roles: Set[Role], keyword: str) -> FetchResult:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        return self._households.search(keyword=require_non_empty(keyword, "Từ khóa tìm kiếm"))

    def get_household(self, *, current_roles: Set[Role], household_id: int) -> dict:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        household = self._households.get(require_id(household_id, "Mã hộ khẩu"))
        if not household:
            raise ValidationError("Hộ khẩu không tồn tại")
        return household

    def _build(self, data: Mapping[str, Any], *, active: bool) -> dict:
        record = HOUSEHOLD.normalize(data)
        record["ownerName"] = require_non_empty(record.get("ownerName", ""), "Tên chủ hộ")
        record["soHoKhau"] = require_non_empty(record.get("soHoKhau", ""), "Số hộ khẩu")
        if record["numMembers"] < 1:
            raise ValidationError("Số thành viên phải lớn hơn 0")
        record["active"] = active
        return record

    def create_household(self, *, current_roles: Set[Role], data: Mapping[str, Any]) -> Optional[dict]:
        """Create a household.

        Only admins approve on creation; a household registered by a tổ
        trưởng stays inactive until an admin activates it.
        """

        require_action(current_roles, Action.EDIT_HOUSEHOLD)
        if can_perform(current_roles, Action.APPROVE_ON_CREATE):
            active = parse_flag(data.get("active"), default=True)
        else:
            active = False
        record = self._build(data, active=active)
        record["id"] = None
        return self._households.create(record)

    def update_household(
        self,
        *,
        current_roles: Set[Role],
        household_id: int,
        data: Mapping[str, Any],
    ) -> Optional[dict]:
        require_action(current_roles, Action.EDIT_HOUSEHOLD)
        existing = self.get_household(current_roles=current_roles, household_id=household_id)
        if can_perform(current_roles, Action.ACTIVATE_HOUSEHOLD):
            active = parse_flag(data.get("active"), default=existing["active"])
        else:
            active = existing["active"]
        record = self._build(data, active=active)
        record["id"] = existing["id"]
        return self._households.update(existing["id"], record)

    def delete_household(self, *, current_roles: Set[Role], household_id: int) -> None:
        require_action(current_roles, Action.DELETE_HOUSEHOLD)
        self._households.delete(require_id(household_id, "Mã hộ khẩu"))

    def activate_household(self, *, current_roles: Set[Role], household_id: int) -> None:
        require_action(current_roles, Action.ACTIVATE_HOUSEHOLD)
        self._households.activate(require_id(household_id, "Mã hộ khẩu"))

    def list_members(self, *, current_roles: Set[Role], household_id: int) -> FetchResult:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        return self._households.list_members(require_id(household_id, "Mã hộ khẩu"))

    def add_member(
        self,
        *,
        current_roles: Set[Role],
        household_id: int,
        person_id: Any,
        relationship: str,
        notes: str = "",
    ) -> None:
        require_action(current_roles, Action.EDIT_HOUSEHOLD)
        member = {
            "personId": require_id(person_id, "Nhân khẩu"),
            "relationshipWithOwner": require_non_empty(relationship, "Quan hệ với chủ hộ"),
            "notes": optional_text(notes) or "",
        }
        self._households.add_member(require_id(household_id, "Mã hộ khẩu"), member)

    def remove_member(
        self,
        *,
        current_roles: Set[Role],
        household_id: int,
        person_id: int,
        notes: str = "",
    ) -> None:
        require_action(current_roles, Action.EDIT_HOUSEHOLD)
        self._households.remove_member(
            require_id(household_id, "Mã hộ khẩu"),
            require_id(person_id, "Nhân khẩu"),
            notes=optional_text(notes),
        )

    def history(self, *, current_roles: Set[Role], household_id: int) -> FetchResult:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        return self._households.list_history(require_id(household_id, "Mã hộ khẩu"))
