from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from crm.api.deps import get_current_user, get_db
from crm.core.config import settings
from crm.schemas.auth import CurrentUser
from crm.schemas.common import Message
from crm.schemas.lead import LeadCreate, LeadRead, LeadUpdate
from crm.schemas.reporting import PipelineStage
from crm.services.common import MAX_SQL_INTEGER
from crm.services.lead import LeadFilters, LeadService
from crm.services.reporting import ReportingService

router = APIRouter(prefix="/leads", tags=["leads"])


@router.get("/stats/pipeline", response_model=list[PipelineStage])
def pipeline_stats(
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> list[PipelineStage]:
    return ReportingService(session).lead_pipeline(current_user.company_id)


@router.get("", response_model=list[LeadRead])
def list_leads(
    search: str | None = Query(None),
    stage: str | None = Query(None),
    limit: int = Query(settings.default_list_limit, ge=1, le=MAX_SQL_INTEGER),
    offset: int = Query(0, ge=0, le=MAX_SQL_INTEGER),
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> list[LeadRead]:
    filters = LeadFilters(search=search, stage=stage, limit=limit, offset=offset)
    leads = LeadService(session).list_leads(current_user.company_id, filters)
    return [LeadRead.model_validate(lead) for lead in leads]


@router.get("/{lead_id}", response_model=LeadRead)
def get_lead(
    lead_id: UUID,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> LeadRead:
    lead = LeadService(session).get_lead(current_user.company_id, lead_id)
    return LeadRead.model_validate(lead)


@router.post("", response_model=LeadRead, status_code=status.HTTP_201_CREATED)
def create_lead(
    payload: LeadCreate,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> LeadRead:
    lead = LeadService(session).create_lead(current_user.company_id, payload)
    return LeadRead.model_validate(lead)


@router.put("/{lead_id}", response_model=LeadRead)
def update_lead(
    lead_id: UUID,
    payload: LeadUpdate,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> LeadRead:
    lead = LeadService(session).update_lead(current_user.company_id, lead_id, payload)
    return LeadRead.model_validate(lead)


@router.delete("/{lead_id}", response_model=Message)
def delete_lead(
    lead_id: UUID,
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Message:
    LeadService(session).delete_lead(current_user.company_id, lead_id)
    return Message(message="Lead deleted successfully")
