from datetime import datetime
from typing import Iterable, List, Optional, Set
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.errors import translate_db_errors
from src.app.repositories.session_repository import ISessionRepository
from src.domain.base import utcnow
from src.domain.entities import Session, SubjectType


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_db_errors
    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    @translate_db_errors
    async def find_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """
        Find session by refresh token hash.

        Revoked and expired rows are returned too; the caller decides what
        they mean so the store stays free of policy.
        """
        stmt = select(Session).where(Session.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_db_errors
    async def revoke(self, token_hash: str) -> int:
        """Revoke the live session with this hash"""
        stmt = (
            update(Session)
            .where(Session.token_hash == token_hash, Session.revoked_at.is_(None))
            .values(revoked_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    @translate_db_errors
    async def rotate(
        self, old_token_hash: str, new_token_hash: str, new_expires_at: datetime
    ) -> int:
        """
        Rotate the refresh token hash in a single conditional UPDATE.

        Two requests racing with the same stale token both target
        token_hash == old_token_hash; the database applies one of them and
        the other matches no row.
        """
        stmt = (
            update(Session)
            .where(Session.token_hash == old_token_hash, Session.revoked_at.is_(None))
            .values(token_hash=new_token_hash, expires_at=new_expires_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    @translate_db_errors
    async def delete_revoked_before(self, cutoff: datetime) -> int:
        """Delete sessions revoked before cutoff"""
        stmt = delete(Session).where(
            Session.revoked_at.is_not(None), Session.revoked_at < cutoff
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    @translate_db_errors
    async def find_expired_active_subject_ids(
        self, subject_type: SubjectType, now: datetime
    ) -> List[UUID]:
        """Distinct subjects owning an expired, never revoked session"""
        stmt = (
            select(Session.subject_id)
            .where(
                Session.subject_type == subject_type,
                Session.expires_at < now,
                Session.revoked_at.is_(None),
            )
            .distinct()
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    @translate_db_errors
    async def find_subject_ids_with_active_sessions(
        self, subject_type: SubjectType, subject_ids: Iterable[UUID], now: datetime
    ) -> Set[UUID]:
        """Subset of subject_ids that still own a live session"""
        ids = list(subject_ids)
        if not ids:
            return set()
        stmt = (
            select(Session.subject_id)
            .where(
                Session.subject_type == subject_type,
                Session.subject_id.in_(ids),
                Session.expires_at >= now,
                Session.revoked_at.is_(None),
            )
            .distinct()
        )
        result = await self.session.exec(stmt)
        return set(result.all())
