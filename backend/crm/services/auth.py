from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from crm.core.config import settings
from crm.core.errors import Conflict, InvalidCredentials
from crm.core.logging_setup import logger
from crm.models.base import utcnow
from crm.models.company import Company
from crm.models.user import User, UserRole
from crm.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
)
from crm.utils.security import get_password_hash, issue_token, verify_password


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_user_by_email(self, email: str) -> User | None:
        return self.session.exec(select(User).where(User.email == email)).first()

    def register(self, payload: RegisterRequest) -> RegisterResponse:
        email = normalize_email(payload.email)
        if self.find_user_by_email(email):
            raise Conflict("User already exists")

        company_name = (payload.company_name or "").strip() or settings.default_company_name
        company = Company(name=company_name)
        self.session.add(company)
        self.session.flush()

        user = User(
            company_id=company.id,
            email=email,
            password_hash=get_password_hash(payload.password),
            name=payload.name,
            role=UserRole.USER.value,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            # Concurrent registration won the unique email index.
            self.session.rollback()
            raise Conflict("User already exists") from exc
        self.session.refresh(user)

        logger.info("User registered id=%s company=%s", user.id, company.id)
        return RegisterResponse(
            token=issue_token(str(user.id)),
            user=PublicUser.model_validate(user),
        )

    def login(self, payload: LoginRequest) -> LoginResponse:
        email = normalize_email(payload.email)
        user = self.find_user_by_email(email)

        if not user or not verify_password(payload.password, user.password_hash):
            logger.warning("Rejected login attempt for %s", email)
            raise InvalidCredentials()

        user.last_login = utcnow()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)

        return LoginResponse(
            token=issue_token(str(user.id)),
            user=LoginUser.model_validate(user),
        )
