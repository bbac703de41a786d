"""Services package."""

from services.authorization import WriteGrant, authorize_read, authorize_write
from services.employee_service import EmployeeService

__all__ = ["EmployeeService", "WriteGrant", "authorize_read", "authorize_write"]
