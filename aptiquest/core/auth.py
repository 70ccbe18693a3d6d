from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from aptiquest.core.config import settings

bearer = HTTPBearer(auto_error=False)


class TokenData(BaseModel):
    sub: str
    username: str
    role: str = "student"


def create_access_token(
    user_id: str, username: str, role: str, ttl_minutes: Optional[int] = None
) -> str:
    now = datetime.now(timezone.utc)
    ttl = ttl_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        "sub": user_id,
        "username": username,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=ttl)).timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def _decode(token: str) -> TokenData:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        return TokenData(
            sub=payload["sub"],
            username=payload.get("username", ""),
            role=payload.get("role", "student"),
        )
    except (jwt.PyJWTError, KeyError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "unauthorized", "message": "Token is invalid or expired"},
        )


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> TokenData:
    if creds is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "unauthorized", "message": "No token, authorization denied"},
        )
    return _decode(creds.credentials)


def get_optional_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Optional[TokenData]:
    """Identify the caller when a token is sent; anonymous callers get None"""
    if creds is None:
        return None
    return _decode(creds.credentials)


def require_roles(*required: str):
    def checker(user: TokenData = Depends(get_current_user)) -> TokenData:
        if user.role not in required:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"error": "forbidden", "message": "Insufficient role"},
            )
        return user

    return checker


require_staff = require_roles("faculty", "admin")
require_admin = require_roles("admin")
