from __future__ import annotations

from collections.abc import Set
from enum import Enum

from ..core.constants import MSG_FORBIDDEN
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


class Capability(str, Enum):
    """Quyền truy cập một màn hình, suy ra từ vai trò."""

    AUTHENTICATED = "AUTHENTICATED"
    ADMIN = "ADMIN"
    TO_TRUONG = "TO_TRUONG"
    KE_TOAN = "KE_TOAN"
    HOUSEHOLD_MANAGEMENT = "HOUSEHOLD_MANAGEMENT"
    FEE_MANAGEMENT = "FEE_MANAGEMENT"


class Action(str, Enum):
    """Thao tác trên từng nút bấm trong màn hình."""

    EDIT_FEE = "EDIT_FEE"
    DELETE_FEE = "DELETE_FEE"
    TOGGLE_FEE_STATUS = "TOGGLE_FEE_STATUS"
    APPROVE_ON_CREATE = "APPROVE_ON_CREATE"
    EDIT_HOUSEHOLD = "EDIT_HOUSEHOLD"
    DELETE_HOUSEHOLD = "DELETE_HOUSEHOLD"
    ACTIVATE_HOUSEHOLD = "ACTIVATE_HOUSEHOLD"
    VERIFY_PAYMENT = "VERIFY_PAYMENT"
    DELETE_PAYMENT = "DELETE_PAYMENT"
    MANAGE_USERS = "MANAGE_USERS"


# Roles are flat tiers: no role implies another, unions are spelled out.
def is_admin(roles: Set[Role]) -> bool:
    return Role.ADMIN in roles


def is_to_truong(roles: Set[Role]) -> bool:
    return Role.TO_TRUONG in roles


def is_ke_toan(roles: Set[Role]) -> bool:
    return Role.KE_TOAN in roles


def can_access_household_management(roles: Set[Role]) -> bool:
    return is_admin(roles) or is_to_truong(roles)


def can_access_fee_management(roles: Set[Role]) -> bool:
    return is_admin(roles) or is_ke_toan(roles)


_CAPABILITY_CHECKS = {
    Capability.AUTHENTICATED: lambda roles: True,
    Capability.ADMIN: is_admin,
    Capability.TO_TRUONG: is_to_truong,
    Capability.KE_TOAN: is_ke_toan,
    Capability.HOUSEHOLD_MANAGEMENT: can_access_household_management,
    Capability.FEE_MANAGEMENT: can_access_fee_management,
}

ACTION_CAPABILITIES = {
    Action.EDIT_FEE: Capability.ADMIN,
    Action.DELETE_FEE: Capability.ADMIN,
    Action.TOGGLE_FEE_STATUS: Capability.ADMIN,
    Action.APPROVE_ON_CREATE: Capability.ADMIN,
    Action.EDIT_HOUSEHOLD: Capability.HOUSEHOLD_MANAGEMENT,
    Action.DELETE_HOUSEHOLD: Capability.ADMIN,
    Action.ACTIVATE_HOUSEHOLD: Capability.ADMIN,
    Action.VERIFY_PAYMENT: Capability.FEE_MANAGEMENT,
    Action.DELETE_PAYMENT: Capability.FEE_MANAGEMENT,
    Action.MANAGE_USERS: Capability.ADMIN,
}


def has_capability(roles: Set[Role], capability: Capability) -> bool:
    return _CAPABILITY_CHECKS[capability](roles)


def can_perform(roles: Set[Role], action: Action) -> bool:
    return has_capability(roles, ACTION_CAPABILITIES[action])


def permitted_actions(roles: Set[Role]) -> frozenset[Action]:
    return frozenset(a for a in Action if can_perform(roles, a))


def require_capability(roles: Set[Role], capability: Capability) -> None:
    if not has_capability(roles, capability):
        raise AuthorizationError(MSG_FORBIDDEN)


def require_action(roles: Set[Role], action: Action) -> None:
    if not can_perform(roles, action):
        raise AuthorizationError(MSG_FORBIDDEN)
