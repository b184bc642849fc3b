"""Role resolution from a stored credential.

The cached user record wins when it carries a role. Otherwise the role comes
from the token's payload segment (base64url JSON) through either a ``role``
string or a ``roles`` array. The signature is not verified here: the REST
server does that on every call, the portal only needs the claims to decide
what to show.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Mapping
from typing import Optional

from ..core.enums import Role
from .credentials import Credential

logger = logging.getLogger(__name__)

# Highest first; used when a roles array grants more than one role.
ROLE_PRECEDENCE = (Role.ADMIN, Role.TO_TRUONG, Role.KE_TOAN, Role.USER)


def _b64url_decode(data: str) -> bytes:
    pad = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + pad)


def decode_claims(token: Optional[str]) -> Optional[dict]:
    """Return the token's payload claims, or None if they cannot be read."""

    if not isinstance(token, str) or not token:
        return None
    parts = token.split(".")
    if len(parts) < 2 or not parts[1]:
        logger.debug("Token has no payload segment")
        return None
    try:
        raw = _b64url_decode(parts[1])
        claims = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError) as e:
        logger.debug("Token payload could not be decoded: %s", e)
        return None
    if not isinstance(claims, dict):
        logger.debug("Token payload is not an object")
        return None
    return claims


def roles_from_claims(claims: Optional[Mapping]) -> frozenset[Role]:
    if not claims:
        return frozenset()
    roles = claims.get("roles")
    if isinstance(roles, list):
        parsed = (Role.parse(r) for r in roles)
        return frozenset(r for r in parsed if r is not None)
    role = Role.parse(claims.get("role"))
    return frozenset({role}) if role else frozenset()


def granted_roles(credential: Optional[Credential]) -> frozenset[Role]:
    """All roles the credential grants; empty means least privilege."""

    if credential is None:
        return frozenset()
    user = credential.user
    if isinstance(user, Mapping) and user.get("role"):
        role = Role.parse(user.get("role"))
        return frozenset({role}) if role else frozenset()
    return roles_from_claims(decode_claims(credential.token))


def resolve_role(credential: Optional[Credential]) -> Optional[Role]:
    roles = granted_roles(credential)
    for role in ROLE_PRECEDENCE:
        if role in roles:
            return role
    return None
