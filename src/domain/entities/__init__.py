"""
HRMS Auth Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    CUSTOMER_ROLE,
    AccountStatus,
    EmployeeRole,
    PresenceStatus,
    SubjectType,
)

# Export all entities
from .employee import Employee
from .account import Account
from .customer import Customer
from .customer_access import CustomerAccess
from .session import Session
from .presence import EmployeePresence

__all__ = [
    # Enums
    "CUSTOMER_ROLE",
    "AccountStatus",
    "EmployeeRole",
    "PresenceStatus",
    "SubjectType",
    # Entities
    "Employee",
    "Account",
    "Customer",
    "CustomerAccess",
    "Session",
    "EmployeePresence",
]
