from typing import Optional

from pydantic import Field

from accounthub.auth.models import AccountType, Role
from accounthub.auth.schemas import CamelModel, Email


class UserCreate(CamelModel):
    full_name: str = Field(min_length=1, max_length=100)
    email: Email
    password: str = Field(min_length=6, max_length=100)
    role: Role = Role.USER
    account_type: Optional[AccountType] = None


class UserUpdate(CamelModel):
    full_name: str = Field(min_length=1, max_length=100)
    email: Email
    # left out -> password unchanged
    password: Optional[str] = Field(default=None, min_length=6, max_length=100)
