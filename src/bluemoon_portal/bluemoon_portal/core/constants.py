"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import VehicleType

DEFAULT_SESSION_DAYS = 7
DEFAULT_API_TIMEOUT = 10
DEFAULT_PAGE_SIZE = 50
DEFAULT_RECENT_LIMIT = 5
DEFAULT_MONTHLY_WINDOW = 6
DEFAULT_DASHBOARD_WORKERS = 3

# Phí gửi xe hàng tháng (VND)
MONTHLY_PARKING_FEES = {
    VehicleType.XE_MAY: 70000,
    VehicleType.O_TO: 1200000,
    VehicleType.XE_DAP: 0,
    VehicleType.XE_DIEN: 50000,
}

MSG_LOAD_FAILED = "Không thể tải dữ liệu. Vui lòng thử lại."
MSG_SAVE_FAILED = "Lưu dữ liệu thất bại. Vui lòng thử lại."
MSG_DELETE_FAILED = "Xóa dữ liệu thất bại. Vui lòng thử lại."
MSG_LOGIN_REQUIRED = "Vui lòng đăng nhập để tiếp tục!"
MSG_FORBIDDEN = "Bạn không có quyền"
MSG_PENDING_APPROVAL = "Đang chờ phê duyệt"
