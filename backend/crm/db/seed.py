"""Demo tenant used for local development and manual API checks."""

from datetime import date
from uuid import UUID

from sqlmodel import Session

from crm.core.logging_setup import logger
from crm.models.company import Company
from crm.models.contact import Contact
from crm.models.lead import Lead, LeadStage
from crm.models.task import Task, TaskPriority, TaskStatus
from crm.models.user import User, UserRole
from crm.utils.security import get_password_hash

DEMO_COMPANY_ID = UUID("123e4567-e89b-12d3-a456-426614174000")
DEMO_USER_ID = UUID("123e4567-e89b-12d3-a456-426614174001")
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "password"

_CONTACTS = [
    {
        "id": UUID("c1111111-1111-1111-1111-111111111111"),
        "name": "John Smith",
        "email": "john@acmecorp.com",
        "phone": "+1-555-123-4567",
        "company_name": "Acme Corp",
        "position": "CEO",
        "status": "active",
        "value": 50000,
        "notes": "Key decision maker",
    },
    {
        "id": UUID("c2222222-2222-2222-2222-222222222222"),
        "name": "Sarah Johnson",
        "email": "sarah@techstart.com",
        "phone": "+1-555-987-6543",
        "company_name": "TechStart Inc",
        "position": "CTO",
        "status": "prospect",
        "value": 25000,
        "notes": "Technical evaluation",
    },
]

_LEADS = [
    {
        "id": UUID("a1111111-1111-1111-1111-111111111111"),
        "title": "Enterprise Software Deal",
        "company_name": "Global Industries",
        "contact_name": "Mike Wilson",
        "value": 75000,
        "stage": LeadStage.NEGOTIATION.value,
        "probability": 70,
        "expected_close": date(2024, 2, 15),
        "source": "Website",
        "notes": "Large enterprise deal",
    },
    {
        "id": UUID("a2222222-2222-2222-2222-222222222222"),
        "title": "Small Business Package",
        "company_name": "Local Bakery",
        "contact_name": "Lisa Chen",
        "value": 5000,
        "stage": LeadStage.PROPOSAL.value,
        "probability": 50,
        "expected_close": date(2024, 1, 30),
        "source": "Referral",
        "notes": "Budget conscious client",
    },
]

_TASKS = [
    {
        "id": UUID("b1111111-1111-1111-1111-111111111111"),
        "contact_id": _CONTACTS[0]["id"],
        "title": "Follow up with John Smith",
        "description": "Send proposal for enterprise package",
        "due_date": date(2024, 1, 20),
        "priority": TaskPriority.HIGH.value,
        "status": TaskStatus.PENDING.value,
    },
    {
        "id": UUID("b2222222-2222-2222-2222-222222222222"),
        "contact_id": _CONTACTS[1]["id"],
        "title": "Technical demo for TechStart",
        "description": "Schedule product demonstration",
        "due_date": date(2024, 1, 18),
        "priority": TaskPriority.MEDIUM.value,
        "status": TaskStatus.PENDING.value,
    },
]


def seed_demo_data(session: Session) -> bool:
    """Insert the demo company and its records. Returns False when already present."""
    if session.get(Company, DEMO_COMPANY_ID) is not None:
        logger.info("Demo data already present, skipping seed")
        return False

    session.add(Company(id=DEMO_COMPANY_ID, name="Demo Company", plan="basic"))
    session.flush()

    session.add(
        User(
            id=DEMO_USER_ID,
            company_id=DEMO_COMPANY_ID,
            email=DEMO_EMAIL,
            password_hash=get_password_hash(DEMO_PASSWORD),
            name="Demo User",
            role=UserRole.ADMIN.value,
        )
    )
    session.add_all(Contact(company_id=DEMO_COMPANY_ID, **data) for data in _CONTACTS)
    session.add_all(Lead(company_id=DEMO_COMPANY_ID, **data) for data in _LEADS)
    session.flush()
    session.add_all(Task(company_id=DEMO_COMPANY_ID, **data) for data in _TASKS)
    session.commit()

    logger.info("Demo data seeded for company %s", DEMO_COMPANY_ID)
    return True
