from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Vai trò người dùng dùng cho phân quyền.

    Máy chủ có thể trả về hai cách viết (``ROLE_ADMIN`` hoặc ``ADMIN``);
    ``parse`` chuẩn hoá về một giá trị duy nhất ngay tại biên.
    """

    ADMIN = "ADMIN"
    TO_TRUONG = "TO_TRUONG"
    KE_TOAN = "KE_TOAN"
    USER = "USER"

    @classmethod
    def parse(cls, value: object) -> Optional["Role"]:
        if not isinstance(value, str):
            return None
        key = value.strip().upper()
        if key.startswith("ROLE_"):
            key = key[len("ROLE_"):]
        try:
            return cls(key)
        except ValueError:
            return None


class FeeType(str, Enum):
    """Loại khoản thu: bắt buộc hoặc tự nguyện."""

    MANDATORY = "MANDATORY"
    VOLUNTARY = "VOLUNTARY"


class ResidenceStatus(str, Enum):
    """Trạng thái đăng ký tạm trú/tạm vắng."""

    TAM_TRU = "TAM_TRU"
    TAM_VANG = "TAM_VANG"


class VehicleType(str, Enum):
    XE_MAY = "XE_MAY"
    O_TO = "O_TO"
    XE_DAP = "XE_DAP"
    XE_DIEN = "XE_DIEN"


class ServiceType(str, Enum):
    """Loại dịch vụ tiện ích tính theo tháng."""

    DIEN = "DIEN"
    NUOC = "NUOC"
    INTERNET = "INTERNET"
    VE_SINH = "VE_SINH"
    BAO_VE = "BAO_VE"


class PaymentMethod(str, Enum):
    TIEN_MAT = "TIEN_MAT"
    CHUYEN_KHOAN = "CHUYEN_KHOAN"
    THE_ATM = "THE_ATM"
    VI_DIEN_TU = "VI_DIEN_TU"


class UtilityPaymentStatus(str, Enum):
    """Trạng thái thanh toán phí dịch vụ hàng tháng."""

    DA_THANH_TOAN = "DA_THANH_TOAN"
    THANH_CONG = "THANH_CONG"
    CHUA_THANH_TOAN = "CHUA_THANH_TOAN"
    THANH_TOAN_MUON = "THANH_TOAN_MUON"
    HUY_BO = "HUY_BO"

    @property
    def is_paid(self) -> bool:
        return self in (UtilityPaymentStatus.DA_THANH_TOAN, UtilityPaymentStatus.THANH_CONG)
