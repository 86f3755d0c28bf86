"""
HRMS Auth Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AccountStatus(str, Enum):
    """Employee account / customer access status"""

    active = "ACTIVE"
    inactive = "INACTIVE"


class EmployeeRole(str, Enum):
    """Role carried by an employee account"""

    super_user = "super_user"
    hr = "hr"
    employee = "employee"
    manager = "manager"
    director = "director"


class SubjectType(str, Enum):
    """Principal variant a session belongs to"""

    employee = "employee"
    customer = "customer"


class PresenceStatus(str, Enum):
    """Employee online indicator"""

    online = "ONLINE"
    offline = "OFFLINE"
    away = "AWAY"


# Customers have no account record carrying a role
CUSTOMER_ROLE = "customer"
