"""Closed value sets shared by models, schemas and validation."""

from enum import Enum


class Department(str, Enum):
    """Departments an employee can belong to."""

    IT = "IT"
    HR = "HR"
    FINANCE = "Finance"
    MARKETING = "Marketing"
    SALES = "Sales"
    OPERATIONS = "Operations"
    ENGINEERING = "Engineering"


class EmployeeStatus(str, Enum):
    """Employment status."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"


class UserRole(str, Enum):
    """Roles of authenticated identities."""

    ADMIN = "admin"
    USER = "user"
