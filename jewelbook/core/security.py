# jewelbook/core/security.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jewelbook.core.config import JWT_ALGO, JWT_EXPIRE_MINUTES, JWT_SECRET
from jewelbook.core.errors import Unauthenticated

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TenantContext:
    """Resolved identity of the caller. Passed explicitly into every repository and service call."""

    tenant_id: str
    user_id: Optional[str] = None


def create_access_token(
        tenant_id: str,
        user_id: Optional[str] = None,
        expires_minutes: int = JWT_EXPIRE_MINUTES,
        secret: str = JWT_SECRET,
) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": user_id or tenant_id,
        "tenant_id": tenant_id,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALGO)


def decode_access_token(token: str, secret: str = JWT_SECRET) -> TenantContext:
    try:
        claims = jwt.decode(token, secret, algorithms=[JWT_ALGO])
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token expired")
    except jwt.PyJWTError:
        raise Unauthenticated("Invalid token")

    tenant_id = claims.get("tenant_id")
    if not tenant_id:
        raise Unauthenticated("User not associated with a company")
    return TenantContext(tenant_id=str(tenant_id), user_id=claims.get("sub"))


def get_tenant_context(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TenantContext:
    # request scoped; nothing is cached between requests
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Not authenticated")
    return decode_access_token(credentials.credentials)
