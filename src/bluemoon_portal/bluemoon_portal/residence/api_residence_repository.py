from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from ..api.base_repository import ApiResourceRepository
from ..common.result import FetchResult
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import ResidenceStatus
from ..mapping.entities import TEMPORARY_RESIDENCE, TEMPORARY_RESIDENCE_DOCUMENT

logger = logging.getLogger(__name__)


def from_document(raw: Mapping) -> dict:
    """Read a document-style record (``maGiay``/``loaiGiay``/``tuNgay``...) as a residence record."""

    doc = TEMPORARY_RESIDENCE_DOCUMENT.to_canonical(raw) or {}
    record = TEMPORARY_RESIDENCE.to_canonical({}) or {}
    kind = str(doc.get("documentType") or "").strip().upper()
    record.update(
        {
            "id": doc.get("id"),
            "status": kind if kind in ResidenceStatus.__members__ else "",
            "date": doc.get("startDate"),
            "requestContent": doc.get("reason") or "",
            "personId": doc.get("personId"),
        }
    )
    return record


class ApiTemporaryResidenceRepository(ApiResourceRepository):
    resource = "/temporary-residence"
    mapping = TEMPORARY_RESIDENCE

    def _to_canonical(self, raw: Any) -> Optional[dict]:
        if isinstance(raw, Mapping) and "maGiay" in raw and "trangThai" not in raw:
            logger.warning("Temporary residence %s uses the document schema; reading it as a residence record", raw.get("id"))
            return from_document(raw)
        return super()._to_canonical(raw)

    def list_page(self, *, page: int = 0, size: int = DEFAULT_PAGE_SIZE, **filters: Any) -> FetchResult:
        params = {k: v for k, v in filters.items() if v not in (None, "")}
        params.update(page=page, size=size)
        return self.fetch_collection(self.resource, params=params)

    def list_by_person(self, person_id: int) -> FetchResult:
        return self.fetch_collection(self._path("nhan-khau", person_id))
