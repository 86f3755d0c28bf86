from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.token_issuer import TokenIssuer


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.employees = MagicMock()
    uow.employees.get_by_official_email = AsyncMock(return_value=None)
    uow.employees.get_by_id = AsyncMock(return_value=None)

    uow.accounts = MagicMock()
    uow.accounts.get_by_employee_id = AsyncMock(return_value=None)
    uow.accounts.update = AsyncMock()

    uow.customers = MagicMock()
    uow.customers.get_by_email = AsyncMock(return_value=None)

    uow.customer_access = MagicMock()
    uow.customer_access.get_by_customer_id = AsyncMock(return_value=None)
    uow.customer_access.update = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock()
    uow.sessions.find_by_token_hash = AsyncMock(return_value=None)
    uow.sessions.revoke = AsyncMock(return_value=1)
    uow.sessions.rotate = AsyncMock(return_value=1)
    uow.sessions.delete_revoked_before = AsyncMock(return_value=0)
    uow.sessions.find_expired_active_subject_ids = AsyncMock(return_value=[])
    uow.sessions.find_subject_ids_with_active_sessions = AsyncMock(return_value=set())

    uow.presence = MagicMock()
    uow.presence.get_by_employee_id = AsyncMock(return_value=None)
    uow.presence.upsert = AsyncMock()
    uow.presence.mark_offline = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def audit():
    return MagicMock()


@pytest.fixture
def token_issuer():
    return TokenIssuer(
        secret="unit-test-secret",
        access_token_ttl=timedelta(minutes=30),
        refresh_token_ttl=timedelta(days=7),
    )


@pytest.fixture
def credential_verifier():
    # Minimum bcrypt cost keeps the suite fast
    return CredentialVerifier(rounds=4)
