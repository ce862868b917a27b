from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column
from accounthub.shared.db import Base

class Category(Base):
    __tablename__ = "categories"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
