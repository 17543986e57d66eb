# tracker/core/auth_deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from tracker.core.errors import Unauthenticated
from tracker.core.security import decode_access_token
from tracker.models.enums import Role
from tracker.policies.rbac import Principal

# missing header is reported by us as 401, not by HTTPBearer
bearer = HTTPBearer(auto_error=False)


def get_current_principal(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Principal:
    """
    Canonical authentication dependency.

    Guarantees:
    - bearer token present, signature valid, not expired
    - user_id and role claims present
    - role is a valid Role
    """
    if creds is None or not creds.credentials:
        raise Unauthenticated("Access token required.")

    try:
        payload = decode_access_token(creds.credentials)
        role = Role(payload["role"])
    except (JWTError, ValueError):
        raise Unauthenticated("Invalid or expired token.")

    principal = Principal(
        user_id=str(payload["user_id"]),
        role=role,
        name=str(payload.get("name") or ""),
        email=str(payload.get("email") or ""),
    )

    # Make principal available to downstream handlers / error logging
    request.state.principal = principal

    return principal
