from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Customer


class ICustomerRepository(ABC):
    """Customer repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Customer]:
        """Get customer by email address"""
        pass
