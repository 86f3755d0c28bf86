from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import CustomerAccess


class ICustomerAccessRepository(ABC):
    """Customer portal access repository interface - application layer"""

    @abstractmethod
    async def get_by_customer_id(self, customer_id: UUID) -> Optional[CustomerAccess]:
        """Get the access record linked to a customer"""
        pass

    @abstractmethod
    async def update(self, access: CustomerAccess) -> CustomerAccess:
        """Update existing access record"""
        pass
