from typing import Any, List, TYPE_CHECKING

from sqlalchemy import JSON
from sqlmodel import Field, Relationship

from crm.models.base import TimestampedModel, UUIDModel

if TYPE_CHECKING:  # pragma: no cover
    from crm.models.user import User


class Company(UUIDModel, TimestampedModel, table=True):
    __tablename__ = "companies"

    name: str = Field(max_length=255)
    plan: str = Field(default="basic", max_length=50)
    settings: dict[str, Any] = Field(default_factory=dict, sa_type=JSON)

    users: List["User"] = Relationship(
        back_populates="company",
        sa_relationship_kwargs={"passive_deletes": True},
    )
