from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} tối thiểu {min_len} ký tự")
    return value


def require_non_negative(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} phải là số")
    if number < 0:
        raise ValidationError(f"{field_name} không được âm")
    return number


def require_id(value: Any, field_name: str) -> int:
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} không hợp lệ")
    if ident <= 0:
        raise ValidationError(f"{field_name} không hợp lệ")
    return ident


def require_month(value: Any) -> int:
    try:
        month = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Tháng không hợp lệ")
    if not 1 <= month <= 12:
        raise ValidationError("Tháng phải từ 1 đến 12")
    return month


def require_year(value: Any) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Năm không hợp lệ")
    if not 2000 <= year <= 2100:
        raise ValidationError("Năm không hợp lệ")
    return year


def optional_text(value: Any) -> Optional[str]:
    text = (str(value) if value is not None else "").strip()
    return text or None


def parse_flag(value: Any, default: bool = False) -> bool:
    """Read a checkbox/JSON boolean; form posts send strings."""

    if isinstance(value, bool):
        return value
    if value is None:
        return default
    text = str(value).strip().lower()
    if text in {"1", "true", "on", "yes"}:
        return True
    if text in {"0", "false", "off", "no", ""}:
        return False
    return default
