"""
Session Entity

Stores one refresh-token lineage per login.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import SubjectType


class Session(SQLModel, table=True):
    """
    Session entity - stores refresh token hashes for authentication.

    Business Rules:
    - Refresh tokens are stored as SHA-256 hex digests, never raw
    - Tokens rotate on each extension: token_hash and expires_at are
      replaced on the same row, so a secret is usable once
    - Revoked sessions block extension; revoked_at is terminal
    - subject_id is the employee id or the customer id, never the account id
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    subject_id: UUID = Field(nullable=False)
    subject_type: SubjectType = Field(nullable=False)

    token_hash: str = Field(unique=True, max_length=128)
    user_agent: Optional[str] = Field(default=None, max_length=255)
    ip_address: Optional[str] = Field(default=None, max_length=64)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_subject", "subject_type", "subject_id"),
        Index("idx_session_revoked_at", "revoked_at"),
    )

    def is_active(self, now: datetime) -> bool:
        return self.revoked_at is None and self.expires_at >= now
