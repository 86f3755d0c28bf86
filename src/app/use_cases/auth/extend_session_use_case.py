"""
Extend Session Use Case

Exchanges a refresh token for a new access token, rotating the refresh token.
"""

import logging
from typing import Optional

from libs.result import Result, Return
from src.app.repositories.errors import PersistenceError
from src.app.services.audit_logger import AuthAuditLogger
from src.app.services.token_issuer import (
    AccessTokenClaims,
    TokenIssuer,
    hash_refresh_token,
    token_fingerprint,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import CUSTOMER_ROLE, AccountStatus, Session, SubjectType
from .dtos import ClientMetadata, ExtendSessionCommand, ExtendSessionResponse
from .errors import PERSISTENCE_ERROR, REFRESH_INVALID, REFRESH_MISSING

logger = logging.getLogger(__name__)


class ExtendSessionUseCase:
    """
    Use case for extending a session (refresh token rotation).

    Business Rules:
    - Unknown, revoked and expired tokens fail with the same REFRESH_INVALID
    - The role is re-read for employees so role changes apply on next refresh
    - Rotation is one conditional UPDATE keyed by the old hash; if it matches
      no row another request already rotated or revoked the session and this
      request fails closed with REFRESH_INVALID
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: TokenIssuer,
        audit: AuthAuditLogger,
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.audit = audit

    async def execute(self, command: ExtendSessionCommand) -> Result[ExtendSessionResponse]:
        """
        Execute extend session use case.

        Args:
            command: Refresh secret from the cookie and client metadata

        Returns:
            Result with ExtendSessionResponse (new access token, new refresh secret), or Error
        """
        client = command.client

        if not command.refresh_token:
            self.audit.security_event(
                "TOKEN_REFRESH_MISSING",
                "medium",
                {"reason": "No refresh token in cookie"},
                ip=client.ip,
            )
            return Return.err(REFRESH_MISSING)

        token_hash = hash_refresh_token(command.refresh_token)

        try:
            return await self._extend(token_hash, client)
        except PersistenceError as exc:
            logger.error(f"Session extension failed with internal error: {exc}")
            self.audit.security_event(
                "TOKEN_REFRESH_ERROR",
                "high",
                {"error": exc.operation, "session": token_fingerprint(token_hash)},
                ip=client.ip,
            )
            return Return.err(PERSISTENCE_ERROR)

    async def _extend(
        self, token_hash: str, client: ClientMetadata
    ) -> Result[ExtendSessionResponse]:
        async with self.uow:
            now = utcnow()
            session = await self.uow.sessions.find_by_token_hash(token_hash)

            if session is None:
                return self._reject(token_hash, client, "session_not_found")
            if not session.is_active(now):
                reason = "session_revoked" if session.revoked_at is not None else "session_expired"
                return self._reject(token_hash, client, reason, session)

            role = await self._current_role(session)
            if role is None:
                return self._reject(token_hash, client, "principal_inactive", session)

            access_token = self.token_issuer.issue_access_token(
                AccessTokenClaims(
                    subject_id=session.subject_id,
                    role=role,
                    subject_type=session.subject_type,
                )
            )
            new_refresh_token = self.token_issuer.issue_refresh_token()

            rotated = await self.uow.sessions.rotate(
                token_hash,
                new_refresh_token.token_hash,
                self.token_issuer.refresh_token_expiry(now),
            )
            if rotated == 0:
                self.audit.security_event(
                    "TOKEN_ROTATION_CONFLICT",
                    "high",
                    {"session": token_fingerprint(token_hash)},
                    ip=client.ip,
                    subject_id=session.subject_id,
                )
                return self._reject(token_hash, client, "rotation_conflict", session)

            await self.uow.commit()

        logger.debug(
            f"Session rotated {token_fingerprint(token_hash)} -> {new_refresh_token.fingerprint}"
        )
        self.audit.auth_event(
            "TOKEN_REFRESH",
            True,
            subject_id=session.subject_id,
            ip=client.ip,
            user_agent=client.user_agent,
            role=role,
        )

        return Return.ok(
            ExtendSessionResponse(
                token=access_token,
                expires_in=self.token_issuer.access_token_expires_in,
                refresh_token=new_refresh_token.secret,
            )
        )

    async def _current_role(self, session: Session) -> Optional[str]:
        """Role to embed in the new access token, None if the principal lost access"""
        if session.subject_type == SubjectType.employee:
            account = await self.uow.accounts.get_by_employee_id(session.subject_id)
            if account is None or account.status != AccountStatus.active:
                return None
            return account.role.value

        access = await self.uow.customer_access.get_by_customer_id(session.subject_id)
        if access is None or access.status != AccountStatus.active:
            return None
        return CUSTOMER_ROLE

    def _reject(
        self,
        token_hash: str,
        client: ClientMetadata,
        reason: str,
        session: Optional[Session] = None,
    ) -> Result[ExtendSessionResponse]:
        self.audit.auth_event(
            "TOKEN_REFRESH",
            False,
            subject_id=session.subject_id if session else None,
            ip=client.ip,
            user_agent=client.user_agent,
            reason=f"{reason} session={token_fingerprint(token_hash)}",
        )
        return Return.err(REFRESH_INVALID)
