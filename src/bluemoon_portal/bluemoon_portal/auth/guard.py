"""Navigation gate.

``decide`` is evaluated for every request against the static
``ROUTE_CAPABILITIES`` table; the result is never cached because the stored
credential may change between two requests.
"""

from __future__ import annotations

import logging
from collections.abc import Set
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.enums import Role
from .capabilities import Capability
from .session import AuthSession

logger = logging.getLogger(__name__)

LOGIN_ENDPOINT = "login"
INDEX_ENDPOINT = "index"
DASHBOARD_ENDPOINT = "dashboard"

PUBLIC_ENDPOINTS = frozenset({LOGIN_ENDPOINT, "logout", "static"})

_HOUSEHOLD = Capability.HOUSEHOLD_MANAGEMENT
_FEE = Capability.FEE_MANAGEMENT

ROUTE_CAPABILITIES: dict[str, Capability] = {
    DASHBOARD_ENDPOINT: Capability.AUTHENTICATED,
    "menu": Capability.AUTHENTICATED,
    "totruong_dashboard": Capability.TO_TRUONG,
    "accountant_dashboard": Capability.KE_TOAN,
    # households
    "households": _HOUSEHOLD,
    "household_add": _HOUSEHOLD,
    "household_detail": _HOUSEHOLD,
    "household_edit": _HOUSEHOLD,
    "household_delete": _HOUSEHOLD,
    "household_activate": _HOUSEHOLD,
    "household_members": _HOUSEHOLD,
    "household_member_add": _HOUSEHOLD,
    "household_member_remove": _HOUSEHOLD,
    "household_history": _HOUSEHOLD,
    # persons
    "persons": _HOUSEHOLD,
    "persons_unassigned": _HOUSEHOLD,
    "person_add": _HOUSEHOLD,
    "person_detail": _HOUSEHOLD,
    "person_edit": _HOUSEHOLD,
    "person_delete": _HOUSEHOLD,
    # temporary residence
    "temporary_residence": _HOUSEHOLD,
    "temporary_residence_add": _HOUSEHOLD,
    "temporary_residence_detail": _HOUSEHOLD,
    "temporary_residence_edit": _HOUSEHOLD,
    "temporary_residence_delete": _HOUSEHOLD,
    # vehicles and utility bills
    "vehicles": _HOUSEHOLD,
    "vehicle_add": _HOUSEHOLD,
    "vehicle_edit": _HOUSEHOLD,
    "vehicle_delete": _HOUSEHOLD,
    "utilities": _HOUSEHOLD,
    "utility_add": _HOUSEHOLD,
    "utility_edit": _HOUSEHOLD,
    "utility_delete": _HOUSEHOLD,
    # fees
    "fees": _FEE,
    "fee_add": _FEE,
    "fee_detail": _FEE,
    "fee_edit": _FEE,
    "fee_toggle_status": _FEE,
    "fee_delete": _FEE,
    # payments
    "payments": _FEE,
    "payments_unverified": _FEE,
    "payment_add": _FEE,
    "payment_detail": _FEE,
    "payment_edit": _FEE,
    "payment_verify": _FEE,
    "payment_unverify": _FEE,
    "payment_delete": _FEE,
    # monthly billing
    "billing": _FEE,
    "billing_household": _FEE,
    "billing_pay": _FEE,
    "billing_mark_paid": _FEE,
    # statistics
    "statistics": _FEE,
    "statistics_export": _FEE,
    # users
    "users": Capability.ADMIN,
    "user_add": Capability.ADMIN,
    "user_edit": Capability.ADMIN,
    "user_delete": Capability.ADMIN,
}


class Outcome(str, Enum):
    RENDER = "RENDER"
    REDIRECT = "REDIRECT"
    LOGIN = "LOGIN"


@dataclass(frozen=True)
class NavigationDecision:
    outcome: Outcome
    endpoint: Optional[str] = None

    @classmethod
    def render(cls) -> "NavigationDecision":
        return cls(Outcome.RENDER)

    @classmethod
    def redirect(cls, endpoint: str) -> "NavigationDecision":
        return cls(Outcome.REDIRECT, endpoint)

    @classmethod
    def login(cls) -> "NavigationDecision":
        return cls(Outcome.LOGIN, LOGIN_ENDPOINT)


def home_endpoint(roles: Set[Role]) -> str:
    """Landing view for a role: TO_TRUONG and KE_TOAN skip the generic dashboard."""

    if Role.TO_TRUONG in roles:
        return "households"
    if Role.KE_TOAN in roles:
        return "fees"
    return DASHBOARD_ENDPOINT


def required_capability(endpoint: str) -> Capability:
    capability = ROUTE_CAPABILITIES.get(endpoint)
    if capability is None:
        logger.warning("Endpoint %s has no route rule; restricting to admin", endpoint)
        return Capability.ADMIN
    return capability


def decide(auth: AuthSession, endpoint: Optional[str]) -> NavigationDecision:
    if endpoint in PUBLIC_ENDPOINTS and endpoint != LOGIN_ENDPOINT:
        return NavigationDecision.render()

    if not auth.is_authenticated:
        if endpoint == LOGIN_ENDPOINT:
            return NavigationDecision.render()
        return NavigationDecision.login()

    roles = auth.roles
    home = home_endpoint(roles)
    if endpoint in (LOGIN_ENDPOINT, INDEX_ENDPOINT, None):
        return NavigationDecision.redirect(home)
    if endpoint == DASHBOARD_ENDPOINT and home != DASHBOARD_ENDPOINT:
        return NavigationDecision.redirect(home)

    if auth.has(required_capability(endpoint)):
        return NavigationDecision.render()

    logger.info("Denied %s for roles %s; redirecting to %s", endpoint, sorted(r.value for r in roles), home)
    return NavigationDecision.redirect(home)
