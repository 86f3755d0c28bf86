"""
EmployeePresence Entity

Online indicator, one row per employee.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow
from .enums import PresenceStatus


class EmployeePresence(SQLModel, table=True):
    """
    EmployeePresence entity - live ONLINE/OFFLINE/AWAY status.

    Business Rules:
    - Upserted, never appended (employee_id unique)
    - ONLINE on login, OFFLINE on logout or when every session has expired
    - Concurrent writers: last write wins on updated_at
    """

    __tablename__ = "employee_online_status"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", unique=True, index=True)
    status: PresenceStatus = Field(default=PresenceStatus.offline)

    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
