from typing import Any

from crm.schemas.common import IDModel, Timestamped


class CompanyRead(IDModel, Timestamped):
    name: str
    plan: str
    settings: dict[str, Any] = {}
