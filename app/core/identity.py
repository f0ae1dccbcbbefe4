from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    USER = "user"
    COMPANY = "company"


@dataclass(frozen=True)
class Identity:
    """Verified actor behind a request: an applicant (user) or a company."""

    role: Role
    id: str

    @property
    def is_user(self) -> bool:
        return self.role is Role.USER

    @property
    def is_company(self) -> bool:
        return self.role is Role.COMPANY
