import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.credential_verifier import CredentialVerifier
from src.depends import get_credential_verifier, get_unit_of_work
from src.domain.entities import (
    Account,
    AccountStatus,
    Customer,
    CustomerAccess,
    Employee,
    EmployeeRole,
)

PASSWORD = "SecurePass123!"

test_verifier = CredentialVerifier(rounds=4)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def uow_factory(session_factory):
    def factory():
        return SqlAlchemyUnitOfWork(session_factory(), close_on_exit=True)

    return factory


class Seeder:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def employee(
        self,
        email: str = "alice@hrms.test",
        password: str = PASSWORD,
        role: EmployeeRole = EmployeeRole.employee,
        status: AccountStatus = AccountStatus.active,
    ) -> Employee:
        employee = Employee(official_email_id=email, name=email.split("@")[0])
        self.session.add(employee)
        await self.session.flush()
        self.session.add(
            Account(
                employee_id=employee.id,
                password_hash=test_verifier.hash(password),
                role=role,
                status=status,
            )
        )
        await self.session.commit()
        return employee

    async def customer(
        self,
        email: str = "buyer@acme.test",
        password: str = PASSWORD,
        status: AccountStatus = AccountStatus.active,
    ) -> Customer:
        customer = Customer(email=email, name="Acme")
        self.session.add(customer)
        await self.session.flush()
        self.session.add(
            CustomerAccess(
                customer_id=customer.id,
                password_hash=test_verifier.hash(password),
                status=status,
            )
        )
        await self.session.commit()
        return customer


@pytest.fixture
def seed(db_session):
    return Seeder(db_session)


@pytest_asyncio.fixture
async def client(db_session):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_credential_verifier] = lambda: test_verifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
