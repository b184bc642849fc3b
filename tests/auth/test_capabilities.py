from __future__ import annotations

import pytest

from src.bluemoon_portal.bluemoon_portal.auth.capabilities import (
    Action,
    Capability,
    can_access_fee_management,
    can_access_household_management,
    can_perform,
    has_capability,
    permitted_actions,
    require_action,
)
from src.bluemoon_portal.bluemoon_portal.core.enums import Role
from src.bluemoon_portal.bluemoon_portal.core.exceptions import AuthorizationError

ADMIN = frozenset({Role.ADMIN})
TT = frozenset({Role.TO_TRUONG})
KT = frozenset({Role.KE_TOAN})
USER = frozenset({Role.USER})
NOBODY = frozenset()


@pytest.mark.parametrize(
    "roles, households, fees",
    [
        (ADMIN, True, True),
        (TT, True, False),
        (KT, False, True),
        (USER, False, False),
        (NOBODY, False, False),
    ],
)
def test_management_areas(roles, households, fees):
    assert can_access_household_management(roles) is households
    assert can_access_fee_management(roles) is fees


def test_roles_are_flat_tiers():
    # ADMIN does not imply the TO_TRUONG or KE_TOAN capability itself
    assert not has_capability(ADMIN, Capability.TO_TRUONG)
    assert not has_capability(ADMIN, Capability.KE_TOAN)


def test_fee_edit_delete_toggle_are_admin_only():
    for action in (Action.EDIT_FEE, Action.DELETE_FEE, Action.TOGGLE_FEE_STATUS):
        assert can_perform(ADMIN, action)
        assert not can_perform(KT, action)
        assert not can_perform(TT, action)


def test_ke_toan_can_verify_payments_but_not_manage_users():
    actions = permitted_actions(KT)

    assert Action.VERIFY_PAYMENT in actions
    assert Action.MANAGE_USERS not in actions
    assert Action.APPROVE_ON_CREATE not in actions


def test_require_action_raises_forbidden():
    with pytest.raises(AuthorizationError) as exc:
        require_action(TT, Action.DELETE_HOUSEHOLD)
    assert str(exc.value) == "Bạn không có quyền"
