from __future__ import annotations

from collections.abc import Set
from typing import Any, Mapping, Optional

from ..auth.capabilities import Capability, require_capability
from ..common.result import FetchResult
from ..common.validators import require_id, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..mapping.entities import PERSON
from .repository import PersonRepository


class PersonService:
    def __init__(self, persons: PersonRepository):
        self._persons = persons

    def list_persons(self, *, current_roles: Set[Role], term: str = "") -> FetchResult:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        term = (term or "").strip()
        if term:
            return self._persons.search(term=term)
        return self._persons.list_all()

    def list_unassigned(self, *, current_roles: Set[Role]) -> FetchResult:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        return self._persons.list_unassigned()

    def get_person(self, *, current_roles: Set[Role], person_id: int) -> dict:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        person = self._persons.get(require_id(person_id, "Mã nhân khẩu"))
        if not person:
            raise ValidationError("Nhân khẩu không tồn tại")
        return person

    @staticmethod
    def _build(data: Mapping[str, Any]) -> dict:
        record = PERSON.normalize(data)
        record["fullName"] = require_non_empty(record["fullName"], "Họ tên")
        if not record["dateOfBirth"]:
            raise ValidationError("Ngày sinh không hợp lệ")
        return record

    def create_person(self, *, current_roles: Set[Role], data: Mapping[str, Any]) -> Optional[dict]:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        record = self._build(data)
        record["id"] = None
        return self._persons.create(record)

    def update_person(self, *, current_roles: Set[Role], person_id: int, data: Mapping[str, Any]) -> Optional[dict]:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        person_id = require_id(person_id, "Mã nhân khẩu")
        record = self._build(data)
        record["id"] = person_id
        return self._persons.update(person_id, record)

    def delete_person(self, *, current_roles: Set[Role], person_id: int) -> None:
        require_capability(current_roles, Capability.HOUSEHOLD_MANAGEMENT)
        self._persons.delete(require_id(person_id, "Mã nhân khẩu"))
