import enum
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import String, Integer, Float, Date, DateTime, ForeignKey, Table, Column, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from accounthub.shared.db import Base
from accounthub.categories.models import Category


class Role(str, enum.Enum):
    USER = "USER"
    PROVIDER = "PROVIDER"


class AccountType(str, enum.Enum):
    FREEMIUM = "FREEMIUM"
    PREMIUM = "PREMIUM"


@dataclass(frozen=True)
class Location:
    street_address: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]


def _now() -> datetime:
    return datetime.now(timezone.utc)


user_service_categories = Table(
    "user_service_categories",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    full_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)

    # embedded location
    street_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    account_type: Mapped[AccountType | None] = mapped_column(
        SAEnum(AccountType, native_enum=False, length=20), nullable=True
    )
    role: Mapped[Role] = mapped_column(SAEnum(Role, native_enum=False, length=20), default=Role.USER)

    # only meaningful for providers
    service_categories: Mapped[List[Category]] = relationship(secondary=user_service_categories, lazy="selectin")
    custom_service_name: Mapped[str | None] = mapped_column(String(200), nullable=True)

    # at most one live reset token; it goes away with the user
    reset_token: Mapped[Optional["PasswordResetToken"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    @property
    def location(self) -> Location | None:
        if self.street_address is None and self.latitude is None and self.longitude is None:
            return None
        return Location(self.street_address, self.latitude, self.longitude)

    @location.setter
    def location(self, loc: Location | None):
        self.street_address = loc.street_address if loc else None
        self.latitude = loc.latitude if loc else None
        self.longitude = loc.longitude if loc else None


class PasswordResetToken(Base):
    __tablename__ = "password_reset_tokens"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    token: Mapped[str] = mapped_column(String(128), unique=True, index=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    user: Mapped[User] = relationship(back_populates="reset_token", lazy="joined")

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or _now()
        expires_at = self.expires_at
        # SQLite hands back naive datetimes; everything is stored as UTC
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at < now
