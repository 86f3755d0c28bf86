"""
Account Entity

Credential record linked 1:1 to an employee.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from .enums import AccountStatus, EmployeeRole


class Account(SQLModel, table=True):
    """
    Account entity - holds the employee's password hash, role and status.

    Business Rules:
    - One account per employee (employee_id unique)
    - Password stored as bcrypt hash
    - Only ACTIVE accounts may log in
    - Role is re-read on every session extension
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", unique=True, index=True)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: EmployeeRole = Field(default=EmployeeRole.employee)
    status: AccountStatus = Field(default=AccountStatus.active)

    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
