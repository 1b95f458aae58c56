from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import and_, case
from sqlmodel import Session, func, select

from crm.core.config import settings
from crm.core.errors import NotFound, ValidationError
from crm.core.logging_setup import logger
from crm.models.base import utcnow
from crm.models.contact import Contact
from crm.models.task import PRIORITY_RANK, Task
from crm.schemas.task import TaskCreate, TaskRead, TaskUpdate
from crm.services.common import is_blank, search_pattern
from crm.services.contact import ContactService


@dataclass
class TaskFilters:
    search: str | None = None
    status: str | None = None
    priority: str | None = None
    limit: int = settings.default_list_limit
    offset: int = 0


class TaskService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _select_with_contact(self):
        # Left join keeps tasks whose contact was removed (contact_name is null).
        return select(Task, Contact.name).outerjoin(
            Contact,
            and_(Contact.id == Task.contact_id, Contact.company_id == Task.company_id),
        )

    def list_tasks(self, company_id: UUID, filters: TaskFilters) -> list[TaskRead]:
        conditions = [Task.company_id == company_id]
        if filters.search:
            pattern = search_pattern(filters.search)
            conditions.append(
                func.lower(Task.title).like(pattern) | func.lower(Task.description).like(pattern)
            )
        if filters.status:
            conditions.append(Task.status == filters.status)
        if filters.priority:
            conditions.append(Task.priority == filters.priority)

        severity = case(PRIORITY_RANK, value=Task.priority, else_=len(PRIORITY_RANK) + 1)
        statement = (
            self._select_with_contact()
            .where(*conditions)
            .order_by(
                severity,
                Task.due_date.asc().nulls_last(),
                Task.created_at.desc(),
            )
            .offset(filters.offset)
            .limit(filters.limit)
        )
        return [TaskRead.from_row(task, contact_name) for task, contact_name in self.session.exec(statement).all()]

    def get_task(self, company_id: UUID, task_id: UUID) -> TaskRead:
        statement = self._select_with_contact().where(Task.id == task_id, Task.company_id == company_id)
        row = self.session.exec(statement).first()
        if not row:
            raise NotFound("Task not found")
        task, contact_name = row
        return TaskRead.from_row(task, contact_name)

    def create_task(self, company_id: UUID, payload: TaskCreate) -> TaskRead:
        if is_blank(payload.title):
            raise ValidationError("Title is required")
        contact = self._resolve_contact(company_id, payload.contact_id)

        task = Task(
            company_id=company_id,
            title=payload.title,
            description=payload.description,
            due_date=payload.due_date,
            priority=payload.priority,
            status=payload.status,
            contact_id=payload.contact_id,
        )
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        logger.info("Task created id=%s company=%s", task.id, company_id)
        return TaskRead.from_row(task, contact.name if contact else None)

    def update_task(self, company_id: UUID, task_id: UUID, payload: TaskUpdate) -> TaskRead:
        task = self._get_model(company_id, task_id)
        if is_blank(payload.title):
            raise ValidationError("Title is required")
        contact = self._resolve_contact(company_id, payload.contact_id)

        task.title = payload.title
        task.description = payload.description
        task.due_date = payload.due_date
        task.priority = payload.priority
        task.status = payload.status
        task.contact_id = payload.contact_id
        task.updated_at = utcnow()

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return TaskRead.from_row(task, contact.name if contact else None)

    def delete_task(self, company_id: UUID, task_id: UUID) -> None:
        task = self._get_model(company_id, task_id)
        self.session.delete(task)
        self.session.commit()
        logger.info("Task deleted id=%s company=%s", task_id, company_id)

    def _get_model(self, company_id: UUID, task_id: UUID) -> Task:
        statement = select(Task).where(Task.id == task_id, Task.company_id == company_id)
        task = self.session.exec(statement).first()
        if not task:
            raise NotFound("Task not found")
        return task

    def _resolve_contact(self, company_id: UUID, contact_id: UUID | None) -> Contact | None:
        if contact_id is None:
            return None
        contact = ContactService(self.session).find_contact(company_id, contact_id)
        if not contact:
            raise ValidationError("Invalid contact ID")
        return contact
