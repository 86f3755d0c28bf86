"""
Employee Entity

Employee principal, looked up by official email during login.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Employee(SQLModel, table=True):
    __tablename__ = "employees"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    official_email_id: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(default="", max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
