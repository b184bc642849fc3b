from __future__ import annotations

import pytest

from src.bluemoon_portal.bluemoon_portal.common.result import FetchResult
from src.bluemoon_portal.bluemoon_portal.core.exceptions import ApiError


def test_empty_success_is_not_a_failure():
    result = FetchResult.success([])

    assert result.ok
    assert result.is_empty
    assert result.unwrap() == []


def test_failure_carries_status_and_unwrap_raises():
    result = FetchResult.failure(ApiError("Máy chủ trả về lỗi 503", status=503))

    assert result.failed
    assert not result.is_empty
    with pytest.raises(ApiError) as exc:
        result.unwrap()
    assert exc.value.status == 503


def test_map_skips_failed_results():
    failed = FetchResult.failure("down")

    assert failed.map(lambda x: x * 2) is failed
    assert FetchResult.success([1, 2]).map(lambda x: x * 2).items == [2, 4]
