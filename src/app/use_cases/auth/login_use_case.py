"""
Login Use Case

Authenticates an employee or customer and opens a refresh-token session.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.repositories.errors import PersistenceError
from src.app.services.audit_logger import AuthAuditLogger
from src.app.services.credential_verifier import (
    CredentialVerifier,
    MalformedPasswordHashError,
)
from src.app.services.identity_resolver import IdentityResolver, ResolvedIdentity
from src.app.services.token_issuer import AccessTokenClaims, TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import PresenceStatus, Session, SubjectType
from .dtos import ClientMetadata, LoginCommand, LoginResponse, SubjectInfo
from .errors import INVALID_CREDENTIALS, MISSING_CREDENTIALS, PERSISTENCE_ERROR

logger = logging.getLogger(__name__)

USER_AGENT_MAX_LENGTH = 255
IP_ADDRESS_MAX_LENGTH = 64


class LoginUseCase:
    """
    Use case for login and session creation.

    Business Rules:
    - Employees resolve before customers
    - Unknown login id, inactive account and wrong password all fail with the
      same INVALID_CREDENTIALS error; the audit log keeps the real reason
    - A bcrypt comparison runs on every failure path, so response time does
      not reveal whether the account exists
    - Employees go ONLINE on login
    - The refresh secret is returned for the cookie only; the session row
      stores its SHA-256 hash
    """

    def __init__(
        self,
        uow: UnitOfWork,
        credential_verifier: CredentialVerifier,
        token_issuer: TokenIssuer,
        audit: AuthAuditLogger,
    ):
        self.uow = uow
        self.credential_verifier = credential_verifier
        self.token_issuer = token_issuer
        self.audit = audit
        self.identity_resolver = IdentityResolver(uow)

    async def execute(self, command: LoginCommand) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            command: Username, password and client metadata

        Returns:
            Result with LoginResponse (access token, subject, refresh secret), or Error
        """
        client = command.client
        username = (command.username or "").strip()
        password = command.password or ""

        if not username or not password:
            self.audit.auth_event(
                "LOGIN",
                False,
                login_id=username or None,
                ip=client.ip,
                user_agent=client.user_agent,
                reason="missing_credentials",
            )
            return Return.err(MISSING_CREDENTIALS)

        try:
            return await self._login(username, password, client)
        except (PersistenceError, MalformedPasswordHashError) as exc:
            logger.error(f"Login failed with internal error: {exc}")
            self.audit.security_event(
                "LOGIN_ERROR",
                "high",
                {"error": exc.__class__.__name__, "login_id": username},
                ip=client.ip,
            )
            return Return.err(PERSISTENCE_ERROR)

    async def _login(
        self, username: str, password: str, client: ClientMetadata
    ) -> Result[LoginResponse]:
        async with self.uow:
            identity = await self.identity_resolver.resolve(username)

            if identity is None:
                self.credential_verifier.verify_dummy(password)
                return self._reject(username, client, "unknown_login_id")

            if not identity.is_active:
                self.credential_verifier.verify_dummy(password)
                return self._reject(
                    username, client, "account_inactive", identity.subject_id, identity.role
                )

            if not self.credential_verifier.verify(
                password, identity.access_record.password_hash
            ):
                return self._reject(
                    username, client, "invalid_password", identity.subject_id, identity.role
                )

            now = utcnow()
            await self._record_login(identity, now)

            access_token = self.token_issuer.issue_access_token(
                AccessTokenClaims(
                    subject_id=identity.subject_id,
                    role=identity.role,
                    subject_type=identity.principal_type,
                    email=identity.email,
                )
            )
            refresh_token = self.token_issuer.issue_refresh_token()

            session = Session(
                subject_id=identity.subject_id,
                subject_type=identity.principal_type,
                token_hash=refresh_token.token_hash,
                user_agent=_truncate(client.user_agent, USER_AGENT_MAX_LENGTH),
                ip_address=_truncate(client.ip, IP_ADDRESS_MAX_LENGTH),
                expires_at=self.token_issuer.refresh_token_expiry(now),
            )
            await self.uow.sessions.create(session)

            await self.uow.commit()

        self.audit.auth_event(
            "LOGIN",
            True,
            subject_id=identity.subject_id,
            login_id=username,
            ip=client.ip,
            user_agent=client.user_agent,
            role=identity.role,
        )
        self.audit.security_event(
            "SUCCESSFUL_LOGIN",
            "low",
            {
                "subject_type": identity.principal_type.value,
                "session": refresh_token.fingerprint,
            },
            ip=client.ip,
            subject_id=identity.subject_id,
        )

        return Return.ok(
            LoginResponse(
                token=access_token,
                expires_in=self.token_issuer.access_token_expires_in,
                subject=SubjectInfo(
                    id=str(identity.subject_id),
                    type=identity.principal_type.value,
                    role=identity.role,
                    email=identity.email,
                ),
                refresh_token=refresh_token.secret,
            )
        )

    async def _record_login(self, identity: ResolvedIdentity, now) -> None:
        identity.access_record.last_login_at = now
        if identity.principal_type == SubjectType.employee:
            await self.uow.accounts.update(identity.access_record)
            await self.uow.presence.upsert(identity.subject_id, PresenceStatus.online)
        else:
            await self.uow.customer_access.update(identity.access_record)

    def _reject(
        self,
        username: str,
        client: ClientMetadata,
        reason: str,
        subject_id: Optional[UUID] = None,
        role: Optional[str] = None,
    ) -> Result[LoginResponse]:
        self.audit.auth_event(
            "LOGIN",
            False,
            subject_id=subject_id,
            login_id=username,
            ip=client.ip,
            user_agent=client.user_agent,
            role=role,
            reason=reason,
        )
        return Return.err(INVALID_CREDENTIALS)


def _truncate(value: Optional[str], length: int) -> Optional[str]:
    if value is None:
        return None
    return value[:length]
