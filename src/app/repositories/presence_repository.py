from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID

from src.domain.entities import EmployeePresence, PresenceStatus


class IPresenceRepository(ABC):
    """Employee presence repository interface - application layer"""

    @abstractmethod
    async def get_by_employee_id(self, employee_id: UUID) -> Optional[EmployeePresence]:
        """Get presence row for an employee"""
        pass

    @abstractmethod
    async def upsert(self, employee_id: UUID, status: PresenceStatus) -> None:
        """Insert or overwrite the single presence row of an employee"""
        pass

    @abstractmethod
    async def mark_offline(self, employee_ids: Iterable[UUID], now: datetime) -> int:
        """
        Set OFFLINE for the given employees, skipping rows already OFFLINE.
        Returns rows updated.
        """
        pass
