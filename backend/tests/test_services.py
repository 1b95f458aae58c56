from datetime import datetime, timedelta, timezone

import pytest
from sqlmodel import Session, func, select

from crm.core.errors import Conflict, NotFound, ValidationError
from crm.models.base import utcnow
from crm.models.company import Company
from crm.models.contact import Contact
from crm.models.lead import Lead
from crm.models.user import User
from crm.schemas.auth import RegisterRequest
from crm.schemas.contact import ContactCreate
from crm.schemas.lead import LeadCreate
from crm.schemas.task import TaskCreate
from crm.services.auth import AuthService
from crm.services.common import normalize_tags, search_pattern
from crm.services.contact import ContactFilters, ContactService
from crm.services.lead import LeadFilters, LeadService, clamp_probability
from crm.services.reporting import ReportingService
from crm.services.task import TaskFilters, TaskService


@pytest.fixture()
def company(db_session: Session) -> Company:
    company = Company(name="Service Co")
    db_session.add(company)
    db_session.commit()
    db_session.refresh(company)
    return company


def test_clamp_probability() -> None:
    assert clamp_probability(None) is None
    assert clamp_probability(-5) == 0
    assert clamp_probability(55) == 55
    assert clamp_probability(250) == 100


def test_search_pattern_is_lowercase_substring() -> None:
    assert search_pattern("  Acme ") == "%acme%"


def test_normalize_tags() -> None:
    assert normalize_tags(None) == []
    assert normalize_tags([" a", "b", "a", "  "]) == ["a", "b"]


def test_contacts_listed_newest_first(db_session: Session, company: Company) -> None:
    now = datetime.now(timezone.utc)
    for index, name in enumerate(("oldest", "middle", "newest")):
        db_session.add(
            Contact(company_id=company.id, name=name, created_at=now + timedelta(minutes=index))
        )
    db_session.commit()

    contacts = ContactService(db_session).list_contacts(company.id, ContactFilters())
    assert [contact.name for contact in contacts] == ["newest", "middle", "oldest"]

    paged = ContactService(db_session).list_contacts(company.id, ContactFilters(limit=1, offset=1))
    assert [contact.name for contact in paged] == ["middle"]


def test_leads_listed_newest_first(db_session: Session, company: Company) -> None:
    now = datetime.now(timezone.utc)
    db_session.add(Lead(company_id=company.id, title="old", created_at=now - timedelta(days=1)))
    db_session.add(Lead(company_id=company.id, title="new", created_at=now))
    db_session.commit()

    leads = LeadService(db_session).list_leads(company.id, LeadFilters())
    assert [lead.title for lead in leads] == ["new", "old"]


def test_contact_service_rejects_blank_name(db_session: Session, company: Company) -> None:
    with pytest.raises(ValidationError) as exc_info:
        ContactService(db_session).create_contact(company.id, ContactCreate(name=" "))
    assert exc_info.value.status_code == 400


def test_contact_lookup_is_company_scoped(db_session: Session, company: Company) -> None:
    other = Company(name="Other Co")
    db_session.add(other)
    db_session.commit()

    contact = ContactService(db_session).create_contact(company.id, ContactCreate(name="Scoped"))
    assert ContactService(db_session).find_contact(other.id, contact.id) is None
    with pytest.raises(NotFound):
        ContactService(db_session).get_contact(other.id, contact.id)


def test_lead_service_defaults(db_session: Session, company: Company) -> None:
    lead = LeadService(db_session).create_lead(company.id, LeadCreate(title="Deal"))
    assert lead.stage == "lead"
    assert lead.probability == 10
    assert lead.value == 0
    assert lead.tags == []


def test_task_service_resolves_contact_name(db_session: Session, company: Company) -> None:
    contact = ContactService(db_session).create_contact(company.id, ContactCreate(name="Linked"))
    task = TaskService(db_session).create_task(
        company.id, TaskCreate(title="Call", contact_id=contact.id)
    )
    assert task.contact_name == "Linked"

    listed = TaskService(db_session).list_tasks(company.id, TaskFilters())
    assert [item.contact_name for item in listed] == ["Linked"]


def test_reporting_on_empty_company(db_session: Session, company: Company) -> None:
    reporting = ReportingService(db_session)
    assert reporting.task_overview(company.id) == []
    assert reporting.lead_pipeline(company.id) == []


def test_pipeline_averages(db_session: Session, company: Company) -> None:
    service = LeadService(db_session)
    service.create_lead(company.id, LeadCreate(title="a", stage="qualified", value=100, probability=20))
    service.create_lead(company.id, LeadCreate(title="b", stage="qualified", value=300, probability=30))
    service.create_lead(company.id, LeadCreate(title="c", stage="lead"))

    pipeline = ReportingService(db_session).lead_pipeline(company.id)
    assert [row.stage for row in pipeline] == ["lead", "qualified"]
    qualified = pipeline[1]
    assert qualified.count == 2
    assert qualified.total_value == 400
    assert qualified.avg_probability == pytest.approx(25.0)


def test_timestamps_are_timezone_aware(db_session: Session, company: Company) -> None:
    assert utcnow().tzinfo is not None
    for column in ("created_at", "updated_at"):
        assert Contact.__table__.c[column].type.timezone is True
    assert User.__table__.c.last_login.type.timezone is True

    contact = Contact(company_id=company.id, name="Aware")
    assert contact.created_at.tzinfo is not None
    db_session.add(contact)
    db_session.commit()
    db_session.refresh(contact)
    assert contact.created_at is not None


def test_register_race_on_unique_email_is_conflict(db_session: Session, monkeypatch) -> None:
    payload = RegisterRequest(name="Racer", email="racer@example.com", password="Senha@123")
    AuthService(db_session).register(payload)
    companies_before = db_session.exec(select(func.count()).select_from(Company)).one()

    # A concurrent request inserted the same email after our existence check.
    service = AuthService(db_session)
    monkeypatch.setattr(service, "find_user_by_email", lambda email: None)
    with pytest.raises(Conflict) as exc_info:
        service.register(payload)

    assert exc_info.value.detail == "User already exists"
    assert db_session.exec(select(func.count()).select_from(Company)).one() == companies_before
    assert len(db_session.exec(select(User).where(User.email == "racer@example.com")).all()) == 1
