from typing import Annotated, Generator
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session, select

from crm.core.config import settings
from crm.core.errors import InvalidToken, Unauthorized
from crm.core.logging_setup import logger
from crm.db.session import get_session
from crm.models.user import User
from crm.schemas.auth import CurrentUser
from crm.utils.security import verify_token

token_header = APIKeyHeader(name=settings.auth_header_name, auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def get_db(request: Request) -> Generator[Session, None, None]:
    yield from get_session(request.app.state.engine)


def get_current_user(
    header_token: Annotated[str | None, Depends(token_header)],
    bearer: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    token = header_token or (bearer.credentials if bearer else None)
    if not token:
        raise Unauthorized("No token, authorization denied")

    subject = verify_token(token)
    try:
        user_id = UUID(subject)
    except ValueError as exc:
        raise InvalidToken() from exc

    statement = select(User).where(User.id == user_id)
    user = session.exec(statement).first()
    if not user:
        logger.warning("Token subject %s no longer resolves to a user", user_id)
        raise Unauthorized("User not found")

    return CurrentUser.model_validate(user)

