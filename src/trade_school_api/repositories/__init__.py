"""Repository collaborators wrapping the ORM."""

from trade_school_api.repositories.base import RecordNotFoundError, SqlRepository
from trade_school_api.repositories.student_repository import StudentRepository
from trade_school_api.repositories.trade_school_repository import TradeSchoolRepository

__all__ = [
    "RecordNotFoundError",
    "SqlRepository",
    "StudentRepository",
    "TradeSchoolRepository",
]
