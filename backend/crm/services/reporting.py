from __future__ import annotations

from uuid import UUID

from sqlalchemy import case
from sqlmodel import Session, func, select

from crm.models.lead import PIPELINE_ORDER, Lead
from crm.models.task import Task
from crm.schemas.reporting import PipelineStage, TaskStatusCount


class ReportingService:
    """Read-only rollups over a company's tasks and leads."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def task_overview(self, company_id: UUID) -> list[TaskStatusCount]:
        statement = (
            select(Task.status, Task.priority, func.count())
            .where(Task.company_id == company_id)
            .group_by(Task.status, Task.priority)
            .order_by(Task.status, Task.priority)
        )
        return [
            TaskStatusCount(status=status, priority=priority, count=count)
            for status, priority, count in self.session.exec(statement).all()
        ]

    def lead_pipeline(self, company_id: UUID) -> list[PipelineStage]:
        # Known stages in pipeline order, anything else (null included) last.
        stage_rank = case(
            {stage.value: index for index, stage in enumerate(PIPELINE_ORDER, start=1)},
            value=Lead.stage,
            else_=len(PIPELINE_ORDER) + 1,
        )
        statement = (
            select(
                Lead.stage,
                func.count(),
                func.coalesce(func.sum(Lead.value), 0),
                func.avg(Lead.probability),
            )
            .where(Lead.company_id == company_id)
            .group_by(Lead.stage)
            .order_by(stage_rank)
        )
        return [
            PipelineStage(
                stage=stage,
                count=count,
                total_value=int(total_value or 0),
                avg_probability=float(avg_probability) if avg_probability is not None else None,
            )
            for stage, count, total_value, avg_probability in self.session.exec(statement).all()
        ]
