from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from crm.api.deps import get_current_user, get_db
from crm.core.config import settings
from crm.schemas.auth import CurrentUser
from crm.schemas.common import Message
from crm.schemas.contact import ContactCreate, ContactRead, ContactUpdate
from crm.services.common import MAX_SQL_INTEGER
from crm.services.contact import ContactFilters, ContactService

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=list[ContactRead])
def list_contacts(
    search: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    limit: int = Query(settings.default_list_limit, ge=1, le=MAX_SQL_INTEGER),
    offset: int = Query(0, ge=0, le=MAX_SQL_INTEGER),
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> list[ContactRead]:
    filters = ContactFilters(search=search, status=status_filter, limit=limit, offset=offset)
    contacts = ContactService(session).list_contacts(current_user.company_id, filters)
    return [ContactRead.model_validate(contact) for contact in contacts]


@router.get("/{contact_id}", response_model=ContactRead)
def get_contact(
    contact_id: UUID,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ContactRead:
    contact = ContactService(session).get_contact(current_user.company_id, contact_id)
    return ContactRead.model_validate(contact)


@router.post("", response_model=ContactRead, status_code=status.HTTP_201_CREATED)
def create_contact(
    payload: ContactCreate,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ContactRead:
    contact = ContactService(session).create_contact(current_user.company_id, payload)
    return ContactRead.model_validate(contact)


@router.put("/{contact_id}", response_model=ContactRead)
def update_contact(
    contact_id: UUID,
    payload: ContactUpdate,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ContactRead:
    contact = ContactService(session).update_contact(current_user.company_id, contact_id, payload)
    return ContactRead.model_validate(contact)


@router.delete("/{contact_id}", response_model=Message)
def delete_contact(
    contact_id: UUID,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Message:
    ContactService(session).delete_contact(current_user.company_id, contact_id)
    return Message(message="Contact deleted successfully")
