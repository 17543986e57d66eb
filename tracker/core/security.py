# tracker/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from tracker.core.config import get_settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# claims every access token must carry to become a Principal
REQUIRED_CLAIMS = ("user_id", "role")


def hash_password(raw: str) -> str:
    return pwd_context.hash(raw)


def verify_password(raw: str, hashed: str) -> bool:
    return pwd_context.verify(raw, hashed)


def create_access_token(
    user_id: str,
    role: str,
    *,
    name: str = "",
    email: str = "",
    expires_minutes: Optional[int] = None,
) -> str:
    """
    Signed bearer token for one user. ``sub`` and ``user_id`` hold the same
    id; name and email ride along for display only and are never used for
    authorization.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    lifetime = timedelta(minutes=expires_minutes or settings.jwt_access_token_minutes)
    payload = {
        "sub": str(user_id),
        "user_id": str(user_id),
        "role": role,
        "name": name,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry and check the required claims.
    Raises JWTError for anything that should not authenticate.
    """
    settings = get_settings()
    payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    missing = [c for c in REQUIRED_CLAIMS if not payload.get(c)]
    if missing:
        raise JWTError(f"token missing claims: {', '.join(missing)}")
    return payload
