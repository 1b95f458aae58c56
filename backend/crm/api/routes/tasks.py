from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from crm.api.deps import get_current_user, get_db
from crm.core.config import settings
from crm.schemas.auth import CurrentUser
from crm.schemas.common import Message
from crm.schemas.reporting import TaskStatusCount
from crm.schemas.task import TaskCreate, TaskRead, TaskUpdate
from crm.services.common import MAX_SQL_INTEGER
from crm.services.reporting import ReportingService
from crm.services.task import TaskFilters, TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/stats/overview", response_model=list[TaskStatusCount])
def overview_stats(
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> list[TaskStatusCount]:
    return ReportingService(session).task_overview(current_user.company_id)


@router.get("", response_model=list[TaskRead])
def list_tasks(
    search: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    priority: str | None = Query(None),
    limit: int = Query(settings.default_list_limit, ge=1, le=MAX_SQL_INTEGER),
    offset: int = Query(0, ge=0, le=MAX_SQL_INTEGER),
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> list[TaskRead]:
    filters = TaskFilters(
        search=search,
        status=status_filter,
        priority=priority,
        limit=limit,
        offset=offset,
    )
    return TaskService(session).list_tasks(current_user.company_id, filters)


@router.get("/{task_id}", response_model=TaskRead)
def get_task(
    task_id: UUID,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> TaskRead:
    return TaskService(session).get_task(current_user.company_id, task_id)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> TaskRead:
    return TaskService(session).create_task(current_user.company_id, payload)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: UUID,
    payload: TaskUpdate,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> TaskRead:
    return TaskService(session).update_task(current_user.company_id, task_id, payload)


@router.delete("/{task_id}", response_model=Message)
def delete_task(
    task_id: UUID,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Message:
    TaskService(session).delete_task(current_user.company_id, task_id)
    return Message(message="Task deleted successfully")
