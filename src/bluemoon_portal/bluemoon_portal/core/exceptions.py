from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ApiError(DomainError):
    """Raised when a call to the REST server fails.

    Covers transport errors, non-2xx statuses and unreadable response bodies.
    ``payload`` keeps the decoded error body so views can show the server's
    own message.
    """

    def __init__(self, message: str, *, status: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status = status
        self.payload = payload

    @property
    def server_message(self) -> Optional[str]:
        if isinstance(self.payload, Mapping):
            for key in ("message", "error"):
                value = self.payload.get(key)
                if isinstance(value, str) and value.strip():
                    return value.strip()
        return None

    def user_message(self, fallback: str) -> str:
        return self.server_message or fallback
