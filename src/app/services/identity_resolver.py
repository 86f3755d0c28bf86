"""
Identity Resolver

Maps a login identifier to an employee or customer principal.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    CUSTOMER_ROLE,
    Account,
    AccountStatus,
    Customer,
    CustomerAccess,
    Employee,
    SubjectType,
)

logger = logging.getLogger(__name__)


@dataclass
class ResolvedIdentity:
    principal_type: SubjectType
    principal: Union[Employee, Customer]
    access_record: Union[Account, CustomerAccess]

    @property
    def subject_id(self) -> UUID:
        return self.principal.id

    @property
    def role(self) -> str:
        if self.principal_type == SubjectType.employee:
            return self.access_record.role.value
        return CUSTOMER_ROLE

    @property
    def email(self) -> str:
        if self.principal_type == SubjectType.employee:
            return self.principal.official_email_id
        return self.principal.email

    @property
    def is_active(self) -> bool:
        return self.access_record.status == AccountStatus.active


class IdentityResolver:
    """
    Resolves employees first, then customers.

    An email present in both stores resolves as the employee.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def resolve(self, login_id: str) -> Optional[ResolvedIdentity]:
        employee = await self.uow.employees.get_by_official_email(login_id)
        if employee is not None:
            account = await self.uow.accounts.get_by_employee_id(employee.id)
            if account is None:
                logger.warning(f"Employee {employee.id} has no account record")
                return None
            return ResolvedIdentity(SubjectType.employee, employee, account)

        customer = await self.uow.customers.get_by_email(login_id)
        if customer is not None:
            access = await self.uow.customer_access.get_by_customer_id(customer.id)
            if access is None:
                logger.warning(f"Customer {customer.id} has no portal access record")
                return None
            return ResolvedIdentity(SubjectType.customer, customer, access)

        return None
