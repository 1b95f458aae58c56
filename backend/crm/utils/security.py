from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from crm.core.config import settings
from crm.core.errors import InvalidToken


class TokenType(str, Enum):
    ACCESS = "access"


pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def issue_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Sign a session token for ``user_id``, valid for seven days by default."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    issued_at = datetime.now(timezone.utc)
    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + expires_delta,
        "token_type": TokenType.ACCESS.value,
        "jti": str(uuid4()),
    }
    return jwt.encode(to_encode, settings.resolved_jwt_secret(), algorithm=settings.algorithm)


def verify_token(token: str) -> str:
    """Return the user id carried by ``token`` or raise ``InvalidToken``."""
    try:
        payload = jwt.decode(token, settings.resolved_jwt_secret(), algorithms=[settings.algorithm])
    except JWTError as exc:
        raise InvalidToken() from exc
    if payload.get("token_type") != TokenType.ACCESS.value:
        raise InvalidToken()
    subject = payload.get("sub")
    if not subject:
        raise InvalidToken()
    return str(subject)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
