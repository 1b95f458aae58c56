# noqa: F401 to ensure models are imported for metadata
from crm.models.company import Company
from crm.models.contact import Contact
from crm.models.lead import Lead
from crm.models.task import Task
from crm.models.user import User

__all__ = [
    "Company",
    "Contact",
    "Lead",
    "Task",
    "User",
]
