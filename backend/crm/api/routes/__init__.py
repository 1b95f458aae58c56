from . import auth, companies, contacts, health, leads, tasks

__all__ = [
    "auth",
    "companies",
    "contacts",
    "health",
    "leads",
    "tasks",
]
