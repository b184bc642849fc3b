from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, Protocol

from flask import session

TOKEN_KEY = "token"
USER_KEY = "user"


@dataclass(frozen=True)
class Credential:
    """Bearer token plus the user record cached at login (may be None)."""

    token: Optional[str]
    user: Optional[Mapping] = None


class CredentialStore(Protocol):
    def load(self) -> Optional[Credential]:
        raise NotImplementedError

    def save(self, credential: Credential) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class SessionCredentialStore:
    """Keeps the credential in the Flask session cookie."""

    def load(self) -> Optional[Credential]:
        token = session.get(TOKEN_KEY)
        user = session.get(USER_KEY)
        if not token and not user:
            return None
        return Credential(token=token or None, user=user if isinstance(user, Mapping) else None)

    def save(self, credential: Credential) -> None:
        session[TOKEN_KEY] = credential.token
        if credential.user is not None:
            session[USER_KEY] = dict(credential.user)
        else:
            session.pop(USER_KEY, None)

    def clear(self) -> None:
        session.pop(TOKEN_KEY, None)
        session.pop(USER_KEY, None)


class InMemoryCredentialStore:
    def __init__(self, credential: Optional[Credential] = None):
        self._credential = credential

    def load(self) -> Optional[Credential]:
        return self._credential

    def save(self, credential: Credential) -> None:
        self._credential = credential

    def clear(self) -> None:
        self._credential = None
