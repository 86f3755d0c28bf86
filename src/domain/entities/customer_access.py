"""
CustomerAccess Entity

Portal credentials linked 1:1 to a customer.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from .enums import AccountStatus


class CustomerAccess(SQLModel, table=True):
    """
    CustomerAccess entity - portal password hash and status for a customer.

    Business Rules:
    - One access record per customer (customer_id unique)
    - Role is always "customer"; nothing to store
    """

    __tablename__ = "customer_access"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    customer_id: UUID = Field(foreign_key="customers.id", unique=True, index=True)
    password_hash: str = Field(max_length=60)

    status: AccountStatus = Field(default=AccountStatus.active)

    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
