from __future__ import annotations

from datetime import date
from enum import Enum
from uuid import UUID

from sqlalchemy import JSON, CheckConstraint
from sqlmodel import Field

from crm.models.base import TimestampedModel, UUIDModel


class LeadStage(str, Enum):
    LEAD = "lead"
    QUALIFIED = "qualified"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    CLOSED_WON = "closed-won"
    CLOSED_LOST = "closed-lost"


# Pipeline order used by the stage rollup.
PIPELINE_ORDER: tuple[LeadStage, ...] = tuple(LeadStage)

DEFAULT_PROBABILITY = 10
MIN_PROBABILITY = 0
MAX_PROBABILITY = 100


class Lead(UUIDModel, TimestampedModel, table=True):
    __tablename__ = "leads"
    __table_args__ = (
        CheckConstraint("probability >= 0 AND probability <= 100", name="ck_leads_probability_range"),
    )

    company_id: UUID = Field(foreign_key="companies.id", ondelete="CASCADE", index=True)
    title: str = Field(max_length=255)
    company_name: str | None = Field(default=None, max_length=255)
    contact_name: str | None = Field(default=None, max_length=255)
    value: int | None = Field(default=0)
    stage: str | None = Field(default=LeadStage.LEAD.value, max_length=50, index=True)
    probability: int | None = Field(default=DEFAULT_PROBABILITY)
    expected_close: date | None = Field(default=None, index=True)
    source: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None)
    tags: list[str] = Field(default_factory=list, sa_type=JSON)
