from __future__ import annotations

import logging
from typing import Callable, Optional

from ..core.enums import Role
from . import capabilities
from .capabilities import Action, Capability
from .claims import granted_roles, resolve_role
from .credentials import Credential, CredentialStore

logger = logging.getLogger(__name__)


class AuthSession:
    """Current user's authentication state, read from ``store`` on every call.

    Nothing is cached: a login or logout through any other ``AuthSession``
    sharing the store is visible on the next check. Predicates fail closed:
    without a token, or on an unexpected error while resolving the role, they
    answer False.
    """

    def __init__(self, store: CredentialStore):
        self._store = store

    def login(self, credential: Credential) -> None:
        self._store.save(credential)

    def logout(self) -> None:
        self._store.clear()

    @property
    def credential(self) -> Optional[Credential]:
        return self._store.load()

    @property
    def is_authenticated(self) -> bool:
        try:
            credential = self._store.load()
        except Exception:
            logger.exception("Could not read stored credential")
            return False
        return bool(credential and credential.token)

    @property
    def roles(self) -> frozenset[Role]:
        try:
            return granted_roles(self._store.load())
        except Exception:
            logger.exception("Could not resolve roles")
            return frozenset()

    @property
    def role(self) -> Optional[Role]:
        try:
            return resolve_role(self._store.load())
        except Exception:
            logger.exception("Could not resolve role")
            return None

    @property
    def user(self) -> dict:
        credential = self.credential
        return dict(credential.user) if credential and credential.user else {}

    def _check(self, predicate: Callable[[frozenset[Role]], bool]) -> bool:
        if not self.is_authenticated:
            return False
        try:
            return bool(predicate(self.roles))
        except Exception:
            logger.exception("Capability check failed")
            return False

    def is_admin(self) -> bool:
        return self._check(capabilities.is_admin)

    def is_to_truong(self) -> bool:
        return self._check(capabilities.is_to_truong)

    def is_ke_toan(self) -> bool:
        return self._check(capabilities.is_ke_toan)

    def can_access_household_management(self) -> bool:
        return self._check(capabilities.can_access_household_management)

    def can_access_fee_management(self) -> bool:
        return self._check(capabilities.can_access_fee_management)

    def has(self, capability: Capability) -> bool:
        return self._check(lambda roles: capabilities.has_capability(roles, capability))

    def can(self, action: Action) -> bool:
        return self._check(lambda roles: capabilities.can_perform(roles, action))

    def permitted_actions(self) -> frozenset[Action]:
        if not self.is_authenticated:
            return frozenset()
        try:
            return capabilities.permitted_actions(self.roles)
        except Exception:
            logger.exception("Could not compute permitted actions")
            return frozenset()
