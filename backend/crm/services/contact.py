from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from sqlmodel import Session, func, select

from crm.core.config import settings
from crm.core.errors import NotFound, ValidationError
from crm.core.logging_setup import logger
from crm.models.base import utcnow
from crm.models.contact import Contact
from crm.schemas.contact import ContactCreate, ContactUpdate
from crm.services.common import is_blank, normalize_tags, search_pattern


@dataclass
class ContactFilters:
    search: str | None = None
    status: str | None = None
    limit: int = settings.default_list_limit
    offset: int = 0


class ContactService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_contacts(self, company_id: UUID, filters: ContactFilters) -> list[Contact]:
        conditions = [Contact.company_id == company_id]
        if filters.search:
            pattern = search_pattern(filters.search)
            conditions.append(
                func.lower(Contact.name).like(pattern)
                | func.lower(Contact.email).like(pattern)
                | func.lower(Contact.company_name).like(pattern)
            )
        if filters.status:
            conditions.append(Contact.status == filters.status)

        statement = (
            select(Contact)
            .where(*conditions)
            .order_by(Contact.created_at.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        return list(self.session.exec(statement).all())

    def get_contact(self, company_id: UUID, contact_id: UUID) -> Contact:
        contact = self.find_contact(company_id, contact_id)
        if not contact:
            raise NotFound("Contact not found")
        return contact

    def find_contact(self, company_id: UUID, contact_id: UUID) -> Contact | None:
        statement = select(Contact).where(Contact.id == contact_id, Contact.company_id == company_id)
        return self.session.exec(statement).first()

    def create_contact(self, company_id: UUID, payload: ContactCreate) -> Contact:
        if is_blank(payload.name):
            raise ValidationError("Name is required")

        contact = Contact(
            company_id=company_id,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            position=payload.position,
            company_name=payload.company_name,
            status=payload.status,
            value=payload.value or 0,
            notes=payload.notes,
            last_contact=date.today(),
            tags=normalize_tags(payload.tags),
        )
        self.session.add(contact)
        self.session.commit()
        self.session.refresh(contact)
        logger.info("Contact created id=%s company=%s", contact.id, company_id)
        return contact

    def update_contact(self, company_id: UUID, contact_id: UUID, payload: ContactUpdate) -> Contact:
        contact = self.get_contact(company_id, contact_id)
        if is_blank(payload.name):
            raise ValidationError("Name is required")

        # Full replace: fields missing from the payload are cleared.
        contact.name = payload.name
        contact.email = payload.email
        contact.phone = payload.phone
        contact.position = payload.position
        contact.company_name = payload.company_name
        contact.value = payload.value
        contact.notes = payload.notes
        contact.status = payload.status
        contact.tags = normalize_tags(payload.tags)
        contact.updated_at = utcnow()

        self.session.add(contact)
        self.session.commit()
        self.session.refresh(contact)
        return contact

    def delete_contact(self, company_id: UUID, contact_id: UUID) -> None:
        contact = self.get_contact(company_id, contact_id)
        self.session.delete(contact)
        self.session.commit()
        logger.info("Contact deleted id=%s company=%s", contact_id, company_id)
