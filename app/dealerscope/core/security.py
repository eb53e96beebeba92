from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from app.dealerscope.core.config import settings
from app.dealerscope.core.roles import normalize_role

SESSION_TOKEN_USE = "session"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/dealerscope/auth/login")


class TokenData(BaseModel):
    """Identity carried by a session token; authorization is always re-checked against the user row."""

    sub: str
    role: str
    store_id: str | None = None
    store_group_id: str | None = None
    email: str
    is_active: bool
    token_use: str


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(claims: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {**claims, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def session_claims(user) -> dict[str, Any]:
    return {
        "sub": str(user.id),
        "role": normalize_role(user.role),
        "store_id": str(user.store_id) if user.store_id else None,
        "store_group_id": str(user.store_group_id) if user.store_group_id else None,
        "email": user.email,
        "is_active": user.is_active,
        "token_use": SESSION_TOKEN_USE,
    }


def create_session_token(user, expires_delta: Optional[timedelta] = None) -> str:
    return create_access_token(session_claims(user), expires_delta=expires_delta)


def read_session_token(token: str) -> TokenData:
    """Decode and validate a session token.

    Raises ``JWTError`` for bad signatures, expiry or a token minted for another
    use, and ``pydantic.ValidationError`` when claims are missing.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("token_use") != SESSION_TOKEN_USE:
        raise JWTError("token is not a session token")
    return TokenData(**payload)
