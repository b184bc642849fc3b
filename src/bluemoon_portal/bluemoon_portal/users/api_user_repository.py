from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from ..api.base_repository import ApiResourceRepository
from ..mapping.entities import USER


class ApiUserRepository(ApiResourceRepository):
    resource = "/users"
    mapping = USER

    @staticmethod
    def _payload(record: Mapping, password: Optional[str]) -> dict:
        payload = USER.to_wire(record) or {}
        if password:
            payload["password"] = password
        return payload

    def create(self, record: Mapping, *, password: Optional[str] = None) -> Optional[dict]:
        return self._to_canonical(self._client.post(self.resource, json=self._payload(record, password)))

    def update(self, record_id: Any, record: Mapping, *, password: Optional[str] = None) -> Optional[dict]:
        return self._to_canonical(self._client.put(self._path(record_id), json=self._payload(record, password)))
