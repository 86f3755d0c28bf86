from abc import ABC, abstractmethod

from src.app.repositories.account_repository import IAccountRepository
from src.app.repositories.customer_access_repository import ICustomerAccessRepository
from src.app.repositories.customer_repository import ICustomerRepository
from src.app.repositories.employee_repository import IEmployeeRepository
from src.app.repositories.presence_repository import IPresenceRepository
from src.app.repositories.session_repository import ISessionRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    employees: IEmployeeRepository
    accounts: IAccountRepository
    customers: ICustomerRepository
    customer_access: ICustomerAccessRepository
    sessions: ISessionRepository
    presence: IPresenceRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
