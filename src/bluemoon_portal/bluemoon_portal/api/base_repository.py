from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from ..common.result import FetchResult
from ..core.exceptions import ApiError
from ..mapping.fields import EntityMapping
from .client import ApiClient, as_collection

logger = logging.getLogger(__name__)


class ApiResourceRepository:
    """CRUD over one REST collection, translating records with ``mapping``.

    Collection reads return ``FetchResult`` so callers can tell "nothing
    there" from "could not load"; single-record calls raise ``ApiError``.
    """

    resource: str = ""
    mapping: EntityMapping

    def __init__(self, client: ApiClient):
        self._client = client

    def _path(self, *parts: Any) -> str:
        return "/".join([self.resource.rstrip("/"), *(str(p) for p in parts)])

    def _to_canonical(self, raw: Any) -> Optional[dict]:
        return self.mapping.to_canonical(raw)

    def fetch_collection(
        self,
        path: str,
        *,
        params: Optional[Mapping] = None,
        mapping: Optional[EntityMapping] = None,
    ) -> FetchResult:
        convert = mapping.to_canonical if mapping is not None else self._to_canonical
        name = (mapping or self.mapping).name
        try:
            payload = self._client.get(path, params=params)
        except ApiError as e:
            logger.error("Loading %s from %s failed: %s", name, path, e)
            return FetchResult.failure(e)

        raw_items = as_collection(payload)
        if raw_items is None:
            logger.warning("Unexpected %s payload from %s: %s", name, path, type(payload).__name__)
            return FetchResult.success([])

        items = []
        for raw in raw_items:
            mapped = convert(raw)
            if mapped is None:
                logger.warning("Skipping non-object %s record from %s", name, path)
                continue
            items.append(mapped)
        return FetchResult.success(items)

    def fetch_one(self, path: str, *, params: Optional[Mapping] = None) -> Optional[dict]:
        payload = self._client.get(path, params=params)
        return self._to_canonical(payload)

    def list_all(self, **filters: Any) -> FetchResult:
        params = {k: v for k, v in filters.items() if v is not None and v != ""}
        return self.fetch_collection(self.resource, params=params)

    def get(self, record_id: Any) -> Optional[dict]:
        return self.fetch_one(self._path(record_id))

    def create(self, record: Mapping) -> Optional[dict]:
        payload = self._client.post(self.resource, json=self.mapping.to_wire(record))
        return self._to_canonical(payload)

    def update(self, record_id: Any, record: Mapping) -> Optional[dict]:
        payload = self._client.put(self._path(record_id), json=self.mapping.to_wire(record))
        return self._to_canonical(payload)

    def delete(self, record_id: Any) -> None:
        self._client.delete(self._path(record_id))
