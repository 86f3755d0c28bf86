from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Account


class IAccountRepository(ABC):
    """Employee account repository interface - application layer"""

    @abstractmethod
    async def get_by_employee_id(self, employee_id: UUID) -> Optional[Account]:
        """Get the account linked to an employee"""
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Update existing account"""
        pass
