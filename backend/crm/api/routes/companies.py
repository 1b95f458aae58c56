from fastapi import APIRouter, Depends
from sqlmodel import Session

from crm.api.deps import get_current_user, get_db
from crm.schemas.auth import CurrentUser
from crm.schemas.company import CompanyRead
from crm.services.company import CompanyService

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("/me", response_model=CompanyRead)
def get_my_company(
    session: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> CompanyRead:
    company = CompanyService(session).get_company(current_user.company_id)
    return CompanyRead.model_validate(company)
