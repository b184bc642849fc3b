"""HTTP client for the BlueMoon REST server.

Every call is a blocking round-trip over a shared ``requests.Session``. There
is no retry: a failure surfaces as ``ApiError`` and the caller decides what
the user sees.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT
from ..core.exceptions import ApiError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


def as_collection(payload: Any) -> Optional[list]:
    """Normalize a collection response.

    Accepts a JSON array, a paginated object carrying ``content`` or a single
    record (an object with an ``id``, wrapped in a list). ``None`` and any
    other object (``{"message": ...}``) mean "no data" and give an empty list.
    Anything else (a string, a number) is a shape mismatch and returns None so
    the caller can report it.
    """

    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        content = payload.get("content")
        if isinstance(content, list):
            return content
        if payload.get("id") is not None:
            return [payload]
        logger.debug("Object without id in a collection response: %s", sorted(payload))
        return []
    return None


class ApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = DEFAULT_API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token_provider = token_provider
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping] = None,
        json: Any = None,
    ) -> Any:
        url = self._url(path)
        try:
            response = self._session.request(
                method,
                url,
                params=dict(params) if params else None,
                json=json,
                headers=self._headers(),
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ApiError("Không thể kết nối tới máy chủ") from e

        payload = self._decode(response)
        if not response.ok:
            logger.error("%s %s returned %s", method, url, response.status_code)
            raise ApiError(
                f"Máy chủ trả về lỗi {response.status_code}",
                status=response.status_code,
                payload=payload,
            )
        return payload

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return None
        content_type = response.headers.get("Content-Type", "")
        if "json" in content_type:
            try:
                return response.json()
            except ValueError as e:
                if response.ok:
                    logger.error("Malformed JSON body from %s", response.url)
                    raise ApiError("Dữ liệu trả về không hợp lệ", status=response.status_code) from e
                return None
        return response.text

    def get(self, path: str, *, params: Optional[Mapping] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, *, params: Optional[Mapping] = None) -> Any:
        return self.request("POST", path, params=params, json=json)

    def put(self, path: str, json: Any = None, *, params: Optional[Mapping] = None) -> Any:
        return self.request("PUT", path, params=params, json=json)

    def patch(self, path: str, json: Any = None, *, params: Optional[Mapping] = None) -> Any:
        return self.request("PATCH", path, params=params, json=json)

    def delete(self, path: str, *, params: Optional[Mapping] = None) -> Any:
        return self.request("DELETE", path, params=params)
