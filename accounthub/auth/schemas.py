from datetime import date, datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from accounthub.auth.models import AccountType, Role, User


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


_email_check = TypeAdapter(EmailStr)


def _valid_email(value: str) -> str:
    # EmailStr would hand back the normalized form (lowercased domain); keep what was sent
    try:
        _email_check.validate_python(value)
    except ValidationError:
        raise ValueError("value is not a valid email address")
    return value


Email = Annotated[str, AfterValidator(_valid_email)]


# --- requests ---
class LocationIn(CamelModel):
    street_address: Optional[str] = Field(default=None, max_length=500)
    latitude: float
    longitude: float


class SignUpRequest(CamelModel):
    role: Role
    full_name: str = Field(min_length=1, max_length=100)
    email: Email
    password: str = Field(min_length=6, max_length=100)
    phone_number: str = Field(min_length=1, max_length=20)
    date_of_birth: date
    location: LocationIn
    account_type: AccountType
    # providers only; picked from GET /api/categories
    category_ids: Optional[List[int]] = Field(
        default=None, validation_alias=AliasChoices("categoryIds", "serviceCategoryIds", "category_ids")
    )
    custom_service_name: Optional[str] = Field(default=None, max_length=200)


class SignInRequest(CamelModel):
    email: Email
    password: str = Field(min_length=1)


class RefreshRequest(CamelModel):
    refresh_token: Optional[str] = None


class ForgotPasswordRequest(CamelModel):
    email: Email


class ResetPasswordRequest(CamelModel):
    token: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=100)


# --- responses ---
class LocationOut(CamelModel):
    street_address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class CategoryOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    description: Optional[str] = None


class UserOut(CamelModel):
    """Public view of a user. There is deliberately no password field."""
    id: int
    role: Role
    full_name: str
    email: str
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    location: Optional[LocationOut] = None
    account_type: Optional[AccountType] = None
    service_categories: List[CategoryOut] = Field(default_factory=list)
    custom_service_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        loc = user.location
        return cls(
            id=user.id,
            role=user.role,
            full_name=user.full_name,
            email=user.email,
            phone_number=user.phone_number,
            date_of_birth=user.date_of_birth,
            location=LocationOut(
                street_address=loc.street_address, latitude=loc.latitude, longitude=loc.longitude
            ) if loc else None,
            account_type=user.account_type,
            service_categories=[CategoryOut.model_validate(c) for c in (user.service_categories or [])],
            custom_service_name=user.custom_service_name,
            created_at=user.created_at,
        )


class AuthResponse(CamelModel):
    success: bool
    message: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    user: Optional[UserOut] = None


class Principal(CamelModel):
    user_id: int
    email: str
