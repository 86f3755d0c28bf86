from datetime import timedelta

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.audit_logger import AuthAuditLogger
from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import ExtendSessionUseCase, LoginUseCase, LogoutUseCase

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

credential_verifier = CredentialVerifier(rounds=ApplicationConfig.BCRYPT_ROUNDS)
token_issuer = TokenIssuer(
    secret=ApplicationConfig.JWT_SECRET,
    algorithm=ApplicationConfig.JWT_ALGORITHM,
    access_token_ttl=timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES),
    refresh_token_ttl=timedelta(days=ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS),
)
audit_logger = AuthAuditLogger()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def create_unit_of_work() -> UnitOfWork:
    """Unit of work owning its own session, for work outside a request"""
    return SqlAlchemyUnitOfWork(AsyncSessionLocal(), close_on_exit=True)


def get_credential_verifier() -> CredentialVerifier:
    return credential_verifier


def get_token_issuer() -> TokenIssuer:
    return token_issuer


def get_audit_logger() -> AuthAuditLogger:
    return audit_logger


def get_login_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    verifier: CredentialVerifier = Depends(get_credential_verifier),
    issuer: TokenIssuer = Depends(get_token_issuer),
    audit: AuthAuditLogger = Depends(get_audit_logger),
) -> LoginUseCase:
    return LoginUseCase(uow, verifier, issuer, audit)


def get_extend_session_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    issuer: TokenIssuer = Depends(get_token_issuer),
    audit: AuthAuditLogger = Depends(get_audit_logger),
) -> ExtendSessionUseCase:
    return ExtendSessionUseCase(uow, issuer, audit)


def get_logout_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuthAuditLogger = Depends(get_audit_logger),
) -> LogoutUseCase:
    return LogoutUseCase(uow, audit)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id, role, type and optional email

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    payload = issuer.verify_access_token(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload
