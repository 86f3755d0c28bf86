from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.errors import translate_db_errors
from src.app.repositories.customer_repository import ICustomerRepository
from src.domain.entities import Customer


class CustomerRepository(ICustomerRepository):
    """Customer repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_db_errors
    async def get_by_email(self, email: str) -> Optional[Customer]:
        """Get customer by email address"""
        stmt = select(Customer).where(Customer.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()
