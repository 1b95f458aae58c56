from crm.services.auth import AuthService
from crm.services.company import CompanyService
from crm.services.contact import ContactFilters, ContactService
from crm.services.lead import LeadFilters, LeadService
from crm.services.reporting import ReportingService
from crm.services.task import TaskFilters, TaskService

__all__ = [
    "AuthService",
    "CompanyService",
    "ContactFilters",
    "ContactService",
    "LeadFilters",
    "LeadService",
    "ReportingService",
    "TaskFilters",
    "TaskService",
]
