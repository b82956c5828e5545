"""ORM model registry. Import all models here so Alembic autogenerate discovers them."""

from trade_school_api.models.base import Base
from trade_school_api.models.student import EnrollmentStatus, Student
from trade_school_api.models.trade_school import TradeSchool
from trade_school_api.models.user import User

__all__ = [
    "Base",
    "EnrollmentStatus",
    "Student",
    "TradeSchool",
    "User",
]
