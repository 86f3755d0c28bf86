"""
Logout Use Case

Revokes the refresh-token session presented by the client.
"""

import logging
from typing import Optional

from libs.result import Result, Return
from src.app.repositories.errors import PersistenceError
from src.app.services.audit_logger import AuthAuditLogger
from src.app.services.token_issuer import hash_refresh_token, token_fingerprint
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import CUSTOMER_ROLE, PresenceStatus, Session, SubjectType
from .dtos import ClientMetadata, LogoutCommand, LogoutResponse
from .errors import PERSISTENCE_ERROR

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Idempotent: no token, unknown token and already revoked session are
      all successful no-ops
    - Employees go OFFLINE; last_login_at is touched for both principal types
    - The route always clears the cookie
    """

    def __init__(self, uow: UnitOfWork, audit: AuthAuditLogger):
        self.uow = uow
        self.audit = audit

    async def execute(self, command: LogoutCommand) -> Result[LogoutResponse]:
        client = command.client

        if not command.refresh_token:
            logger.debug("Logout without refresh token")
            return Return.ok(LogoutResponse(cleared=True))

        token_hash = hash_refresh_token(command.refresh_token)

        try:
            session = await self._revoke(token_hash)
        except PersistenceError as exc:
            logger.error(f"Logout failed with internal error: {exc}")
            self.audit.security_event(
                "LOGOUT_ERROR",
                "high",
                {"error": exc.operation, "session": token_fingerprint(token_hash)},
                ip=client.ip,
            )
            return Return.err(PERSISTENCE_ERROR)

        if session is None:
            logger.debug(
                f"Logout with missing or revoked session {token_fingerprint(token_hash)}"
            )
        else:
            self._audit_logout(session, client)

        return Return.ok(LogoutResponse(cleared=True))

    async def _revoke(self, token_hash: str) -> Optional[Session]:
        """Revoke the session; returns it, or None when there was nothing to revoke"""
        async with self.uow:
            session = await self.uow.sessions.find_by_token_hash(token_hash)
            if session is None or session.revoked_at is not None:
                return None

            revoked = await self.uow.sessions.revoke(token_hash)
            if revoked == 0:
                # A concurrent logout got there first
                return None

            now = utcnow()
            if session.subject_type == SubjectType.employee:
                account = await self.uow.accounts.get_by_employee_id(session.subject_id)
                if account is not None:
                    account.last_login_at = now
                    await self.uow.accounts.update(account)
                await self.uow.presence.upsert(session.subject_id, PresenceStatus.offline)
            else:
                access = await self.uow.customer_access.get_by_customer_id(session.subject_id)
                if access is not None:
                    access.last_login_at = now
                    await self.uow.customer_access.update(access)

            await self.uow.commit()
            return session

    def _audit_logout(self, session: Session, client: ClientMetadata) -> None:
        self.audit.auth_event(
            "LOGOUT",
            True,
            subject_id=session.subject_id,
            ip=client.ip,
            user_agent=client.user_agent,
            role=CUSTOMER_ROLE if session.subject_type == SubjectType.customer else None,
        )
