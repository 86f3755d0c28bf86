from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.errors import translate_db_errors
from src.app.repositories.employee_repository import IEmployeeRepository
from src.domain.entities import Employee


class EmployeeRepository(IEmployeeRepository):
    """Employee repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_db_errors
    async def get_by_official_email(self, email: str) -> Optional[Employee]:
        """Get employee by official email address"""
        stmt = select(Employee).where(Employee.official_email_id == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_db_errors
    async def get_by_id(self, employee_id: UUID) -> Optional[Employee]:
        """Get employee by ID"""
        stmt = select(Employee).where(Employee.id == employee_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()
