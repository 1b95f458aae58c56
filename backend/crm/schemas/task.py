from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from crm.models.task import Task, TaskPriority, TaskStatus
from crm.schemas.common import IDModel, Timestamped


class TaskBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    title: str | None = None
    description: str | None = None
    due_date: date | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    contact_id: UUID | None = None


class TaskCreate(TaskBase):
    priority: TaskPriority | None = TaskPriority.MEDIUM
    status: TaskStatus | None = TaskStatus.PENDING


class TaskUpdate(TaskBase):
    pass


class TaskRead(IDModel, Timestamped):
    company_id: UUID
    contact_id: UUID | None = None
    contact_name: str | None = None
    title: str
    description: str | None = None
    due_date: date | None = None
    priority: str | None = None
    status: str | None = None

    @classmethod
    def from_row(cls, task: Task, contact_name: str | None) -> "TaskRead":
        data = cls.model_validate(task, from_attributes=True)
        data.contact_name = contact_name
        return data
