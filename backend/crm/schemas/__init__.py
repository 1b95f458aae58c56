from crm.schemas import auth, common, company, contact, lead, reporting, task

__all__ = [
    "auth",
    "common",
    "company",
    "contact",
    "lead",
    "reporting",
    "task",
]
