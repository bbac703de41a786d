"""Models package."""

from models.base import Base, ModifyModel
from models.employee import Employee
from models.enums import Department, EmployeeStatus, UserRole
from models.user import User

__all__ = [
    "Base",
    "ModifyModel",
    "Department",
    "Employee",
    "EmployeeStatus",
    "User",
    "UserRole",
]
