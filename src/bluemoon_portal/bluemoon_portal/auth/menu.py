from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from .capabilities import has_capability
from .guard import ROUTE_CAPABILITIES


@dataclass(frozen=True)
class MenuItem:
    title: str
    endpoint: str
    path: str
    admin_only: bool = False
    hide_for: frozenset[Role] = frozenset()
    only_for: Optional[Role] = None

    def visible_to(self, roles: Set[Role]) -> bool:
        if self.admin_only and Role.ADMIN not in roles:
            return False
        if self.only_for is not None:
            return self.only_for in roles
        return not (self.hide_for & roles)


_TT = frozenset({Role.TO_TRUONG})
_KT = frozenset({Role.KE_TOAN})

SIDEBAR = (
    MenuItem("Bảng điều khiển", "dashboard", "/dashboard", hide_for=_TT | _KT),
    MenuItem("Bảng điều khiển", "totruong_dashboard", "/totruong-dashboard", only_for=Role.TO_TRUONG),
    MenuItem("Bảng điều khiển", "accountant_dashboard", "/accountant-dashboard", only_for=Role.KE_TOAN),
    MenuItem("Hộ khẩu", "households", "/households", hide_for=_KT),
    MenuItem("Khoản thu", "fees", "/fees", hide_for=_TT),
    MenuItem("Nộp phí", "payments", "/payments", hide_for=_TT),
    MenuItem("Tạm trú/Tạm vắng", "temporary_residence", "/temporary-residence", hide_for=_KT),
    MenuItem("Nhân khẩu", "persons", "/persons", hide_for=_KT),
    MenuItem("Thống kê", "statistics", "/statistics", hide_for=_TT),
    MenuItem("Quản lý User", "users", "/users", admin_only=True, hide_for=_KT),
)


def visible_menu(roles: Set[Role]) -> list[MenuItem]:
    """Sidebar entries for the roles, minus views the route table would deny."""

    return [
        item
        for item in SIDEBAR
        if item.visible_to(roles) and has_capability(roles, ROUTE_CAPABILITIES[item.endpoint])
    ]
