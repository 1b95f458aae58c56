from datetime import datetime
from enum import Enum
from uuid import UUID

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship

from crm.models.base import TimestampedModel, UUIDModel
from crm.models.company import Company


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class User(UUIDModel, TimestampedModel, table=True):
    __tablename__ = "users"

    company_id: UUID = Field(foreign_key="companies.id", ondelete="CASCADE", index=True)

    email: str = Field(index=True, unique=True, max_length=255)
    password_hash: str = Field(max_length=255)
    name: str = Field(max_length=255)
    role: str = Field(default=UserRole.USER.value, max_length=50)
    is_active: bool = Field(default=True)
    last_login: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    company: Company = Relationship(back_populates="users")
