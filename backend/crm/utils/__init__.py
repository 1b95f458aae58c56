from crm.utils.security import (
    get_password_hash,
    issue_token,
    verify_password,
    verify_token,
)

__all__ = [
    "get_password_hash",
    "issue_token",
    "verify_password",
    "verify_token",
]
