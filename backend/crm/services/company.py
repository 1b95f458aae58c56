from uuid import UUID

from sqlmodel import Session

from crm.core.errors import NotFound
from crm.models.company import Company


class CompanyService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_company(self, company_id: UUID) -> Company:
        company = self.session.get(Company, company_id)
        if not company:
            raise NotFound("Company not found")
        return company
