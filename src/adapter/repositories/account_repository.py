from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.errors import translate_db_errors
from src.app.repositories.account_repository import IAccountRepository
from src.domain.entities import Account


class AccountRepository(IAccountRepository):
    """Employee account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_db_errors
    async def get_by_employee_id(self, employee_id: UUID) -> Optional[Account]:
        """Get the account linked to an employee"""
        stmt = select(Account).where(Account.employee_id == employee_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_db_errors
    async def update(self, account: Account) -> Account:
        """Update existing account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account
