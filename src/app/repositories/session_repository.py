from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional, Set
from uuid import UUID

from src.domain.entities import Session, SubjectType


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def find_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """Find session by refresh token hash, whatever its state"""
        pass

    @abstractmethod
    async def revoke(self, token_hash: str) -> int:
        """
        Set revoked_at on the live session with this hash.

        Returns rows affected; 0 when the hash is unknown or already revoked.
        """
        pass

    @abstractmethod
    async def rotate(
        self, old_token_hash: str, new_token_hash: str, new_expires_at: datetime
    ) -> int:
        """
        Replace token_hash and expires_at in one conditional UPDATE keyed by
        old_token_hash. Returns rows affected; 0 means another request already
        rotated or revoked the session.
        """
        pass

    @abstractmethod
    async def delete_revoked_before(self, cutoff: datetime) -> int:
        """Delete sessions revoked before cutoff. Returns count deleted."""
        pass

    @abstractmethod
    async def find_expired_active_subject_ids(
        self, subject_type: SubjectType, now: datetime
    ) -> List[UUID]:
        """Distinct subjects owning an expired, never revoked session"""
        pass

    @abstractmethod
    async def find_subject_ids_with_active_sessions(
        self, subject_type: SubjectType, subject_ids: Iterable[UUID], now: datetime
    ) -> Set[UUID]:
        """Subset of subject_ids that still own a live session"""
        pass
