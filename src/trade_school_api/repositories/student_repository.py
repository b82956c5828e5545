"""Datastore access for students."""

from trade_school_api.models.student import Student
from trade_school_api.repositories.base import SqlRepository


class StudentRepository(SqlRepository[Student]):
    """Repository for the ``students`` table."""

    model = Student
