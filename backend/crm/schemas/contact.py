from datetime import date
from uuid import UUID

from pydantic import BaseModel

from crm.models.contact import DEFAULT_CONTACT_STATUS
from crm.schemas.common import IDModel, Timestamped


class ContactBase(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    position: str | None = None
    company_name: str | None = None
    status: str | None = None
    value: int | None = None
    notes: str | None = None
    tags: list[str] | None = None


class ContactCreate(ContactBase):
    status: str | None = DEFAULT_CONTACT_STATUS


class ContactUpdate(ContactBase):
    pass


class ContactRead(IDModel, Timestamped):
    company_id: UUID
    name: str
    email: str | None = None
    phone: str | None = None
    position: str | None = None
    company_name: str | None = None
    status: str | None = None
    value: int | None = None
    notes: str | None = None
    last_contact: date | None = None
    tags: list[str] = []
