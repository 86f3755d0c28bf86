from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID, uuid4

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.errors import translate_db_errors
from src.app.repositories.presence_repository import IPresenceRepository
from src.domain.base import utcnow
from src.domain.entities import EmployeePresence, PresenceStatus

# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class PresenceRepository(IPresenceRepository):
    """Employee presence repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_db_errors
    async def get_by_employee_id(self, employee_id: UUID) -> Optional[EmployeePresence]:
        """Get presence row for an employee"""
        stmt = (
            select(EmployeePresence)
            .where(EmployeePresence.employee_id == employee_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_db_errors
    async def upsert(self, employee_id: UUID, status: PresenceStatus) -> None:
        """
        Insert or overwrite the presence row of an employee.

        Uses a native upsert so two devices logging in at once cannot both
        insert; the later write wins.
        """
        now = utcnow()
        dialect = self.session.get_bind().dialect.name
        insert = UPSERT_INSERTS.get(dialect)

        if insert is None:
            presence = await self.get_by_employee_id(employee_id)
            if presence is None:
                presence = EmployeePresence(employee_id=employee_id)
            presence.status = status
            presence.updated_at = now
            self.session.add(presence)
            await self.session.flush()
            return

        stmt = insert(EmployeePresence).values(
            id=uuid4(), employee_id=employee_id, status=status, updated_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["employee_id"],
            set_={"status": status, "updated_at": now},
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @translate_db_errors
    async def mark_offline(self, employee_ids: Iterable[UUID], now: datetime) -> int:
        """Bulk OFFLINE, skipping rows that are already OFFLINE"""
        ids = list(employee_ids)
        if not ids:
            return 0
        stmt = (
            update(EmployeePresence)
            .where(
                EmployeePresence.employee_id.in_(ids),
                EmployeePresence.status != PresenceStatus.offline,
            )
            .values(status=PresenceStatus.offline, updated_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
