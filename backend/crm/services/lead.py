from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlmodel import Session, func, select

from crm.core.config import settings
from crm.core.errors import NotFound, ValidationError
from crm.core.logging_setup import logger
from crm.models.base import utcnow
from crm.models.lead import MAX_PROBABILITY, MIN_PROBABILITY, Lead
from crm.schemas.lead import LeadCreate, LeadUpdate
from crm.services.common import is_blank, normalize_tags, search_pattern


@dataclass
class LeadFilters:
    search: str | None = None
    stage: str | None = None
    limit: int = settings.default_list_limit
    offset: int = 0


def clamp_probability(probability: int | None) -> int | None:
    if probability is None:
        return None
    return max(MIN_PROBABILITY, min(MAX_PROBABILITY, probability))


class LeadService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_leads(self, company_id: UUID, filters: LeadFilters) -> list[Lead]:
        conditions = [Lead.company_id == company_id]
        if filters.search:
            pattern = search_pattern(filters.search)
            conditions.append(
                func.lower(Lead.title).like(pattern)
                | func.lower(Lead.company_name).like(pattern)
                | func.lower(Lead.contact_name).like(pattern)
            )
        if filters.stage:
            conditions.append(Lead.stage == filters.stage)

        statement = (
            select(Lead)
            .where(*conditions)
            .order_by(Lead.created_at.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        return list(self.session.exec(statement).all())

    def get_lead(self, company_id: UUID, lead_id: UUID) -> Lead:
        statement = select(Lead).where(Lead.id == lead_id, Lead.company_id == company_id)
        lead = self.session.exec(statement).first()
        if not lead:
            raise NotFound("Lead not found")
        return lead

    def create_lead(self, company_id: UUID, payload: LeadCreate) -> Lead:
        if is_blank(payload.title):
            raise ValidationError("Title is required")

        lead = Lead(
            company_id=company_id,
            title=payload.title,
            company_name=payload.company_name,
            contact_name=payload.contact_name,
            value=payload.value or 0,
            stage=payload.stage,
            probability=clamp_probability(payload.probability),
            expected_close=payload.expected_close,
            source=payload.source,
            notes=payload.notes,
            tags=normalize_tags(payload.tags),
        )
        self.session.add(lead)
        self.session.commit()
        self.session.refresh(lead)
        logger.info("Lead created id=%s company=%s", lead.id, company_id)
        return lead

    def update_lead(self, company_id: UUID, lead_id: UUID, payload: LeadUpdate) -> Lead:
        lead = self.get_lead(company_id, lead_id)
        if is_blank(payload.title):
            raise ValidationError("Title is required")

        lead.title = payload.title
        lead.company_name = payload.company_name
        lead.contact_name = payload.contact_name
        lead.value = payload.value
        lead.stage = payload.stage
        lead.probability = clamp_probability(payload.probability)
        lead.expected_close = payload.expected_close
        lead.source = payload.source
        lead.notes = payload.notes
        lead.tags = normalize_tags(payload.tags)
        lead.updated_at = utcnow()

        self.session.add(lead)
        self.session.commit()
        self.session.refresh(lead)
        return lead

    def delete_lead(self, company_id: UUID, lead_id: UUID) -> None:
        lead = self.get_lead(company_id, lead_id)
        self.session.delete(lead)
        self.session.commit()
        logger.info("Lead deleted id=%s company=%s", lead_id, company_id)
