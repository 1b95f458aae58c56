from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from crm.models.lead import DEFAULT_PROBABILITY, LeadStage
from crm.schemas.common import IDModel, Timestamped


class LeadBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    title: str | None = None
    company_name: str | None = None
    contact_name: str | None = None
    value: int | None = None
    stage: LeadStage | None = None
    probability: int | None = None
    expected_close: date | None = None
    source: str | None = None
    notes: str | None = None
    tags: list[str] | None = None


class LeadCreate(LeadBase):
    stage: LeadStage | None = LeadStage.LEAD
    probability: int | None = DEFAULT_PROBABILITY


class LeadUpdate(LeadBase):
    pass


class LeadRead(IDModel, Timestamped):
    company_id: UUID
    title: str
    company_name: str | None = None
    contact_name: str | None = None
    value: int | None = None
    stage: str | None = None
    probability: int | None = None
    expected_close: date | None = None
    source: str | None = None
    notes: str | None = None
    tags: list[str] = []
