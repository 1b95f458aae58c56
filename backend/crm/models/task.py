from __future__ import annotations

from datetime import date
from enum import Enum
from uuid import UUID

from sqlalchemy import CheckConstraint
from sqlmodel import Field

from crm.models.base import TimestampedModel, UUIDModel


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Severity rank for list ordering, most severe first.
PRIORITY_RANK: dict[str, int] = {
    TaskPriority.HIGH.value: 1,
    TaskPriority.MEDIUM.value: 2,
    TaskPriority.LOW.value: 3,
}


class Task(UUIDModel, TimestampedModel, table=True):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("priority IN ('low', 'medium', 'high')", name="ck_tasks_priority"),
        CheckConstraint(
            "status IN ('pending', 'in-progress', 'completed', 'cancelled')",
            name="ck_tasks_status",
        ),
    )

    company_id: UUID = Field(foreign_key="companies.id", ondelete="CASCADE", index=True)
    contact_id: UUID | None = Field(
        default=None,
        foreign_key="contacts.id",
        ondelete="SET NULL",
        index=True,
    )
    title: str = Field(max_length=255)
    description: str | None = Field(default=None)
    due_date: date | None = Field(default=None, index=True)
    priority: str | None = Field(default=TaskPriority.MEDIUM.value, max_length=20)
    status: str | None = Field(default=TaskStatus.PENDING.value, max_length=20, index=True)
