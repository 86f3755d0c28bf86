from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.errors import translate_db_errors
from src.app.repositories.customer_access_repository import ICustomerAccessRepository
from src.domain.entities import CustomerAccess


class CustomerAccessRepository(ICustomerAccessRepository):
    """Customer portal access repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_db_errors
    async def get_by_customer_id(self, customer_id: UUID) -> Optional[CustomerAccess]:
        """Get the access record linked to a customer"""
        stmt = select(CustomerAccess).where(CustomerAccess.customer_id == customer_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_db_errors
    async def update(self, access: CustomerAccess) -> CustomerAccess:
        """Update existing access record"""
        self.session.add(access)
        await self.session.flush()
        await self.session.refresh(access)
        return access
