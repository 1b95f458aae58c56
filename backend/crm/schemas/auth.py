from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    company_name: str | None = Field(default=None, alias="companyName")


class LoginRequest(BaseModel):
    # Lookup only; unknown or malformed addresses get the generic credentials error.
    email: str
    password: str


class PublicUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str


class LoginUser(PublicUser):
    company_id: UUID


class CurrentUser(LoginUser):
    """Identity resolved by the auth gate for downstream handlers."""

    role: str


class RegisterResponse(BaseModel):
    token: str
    user: PublicUser


class LoginResponse(BaseModel):
    token: str
    user: LoginUser


class MeResponse(BaseModel):
    user: CurrentUser
