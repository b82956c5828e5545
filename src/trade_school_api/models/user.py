"""User model for API authentication."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from trade_school_api.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """An account that can obtain a bearer token via login."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
