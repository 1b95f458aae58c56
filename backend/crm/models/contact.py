from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import JSON
from sqlmodel import Field

from crm.models.base import TimestampedModel, UUIDModel

DEFAULT_CONTACT_STATUS = "prospect"


class Contact(UUIDModel, TimestampedModel, table=True):
    __tablename__ = "contacts"

    company_id: UUID = Field(foreign_key="companies.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=255, index=True)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=255)
    company_name: str | None = Field(default=None, max_length=255)
    status: str | None = Field(default=DEFAULT_CONTACT_STATUS, max_length=50, index=True)
    value: int | None = Field(default=0)
    notes: str | None = Field(default=None)
    last_contact: date | None = Field(default_factory=date.today)
    tags: list[str] = Field(default_factory=list, sa_type=JSON)
