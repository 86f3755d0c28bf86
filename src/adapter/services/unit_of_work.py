from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_repository import AccountRepository
from src.adapter.repositories.customer_access_repository import CustomerAccessRepository
from src.adapter.repositories.customer_repository import CustomerRepository
from src.adapter.repositories.employee_repository import EmployeeRepository
from src.adapter.repositories.presence_repository import PresenceRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.app.repositories.errors import PersistenceError
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession, close_on_exit: bool = False):
        self.session = session
        # Background jobs own their session; request handlers borrow one
        self.close_on_exit = close_on_exit

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.employees = EmployeeRepository(self.session)
        self.accounts = AccountRepository(self.session)
        self.customers = CustomerRepository(self.session)
        self.customer_access = CustomerAccessRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.presence = PresenceRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()
        if self.close_on_exit:
            await self.session.close()

    async def commit(self):
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError("commit", exc) from exc

    async def rollback(self):
        await self.session.rollback()
