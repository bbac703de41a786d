"""Domain-specific exceptions for the employee records API.

These exceptions keep service-layer failures separate from HTTP responses.
Each carries the status code the error handlers render it with.
"""

from typing import Any


class EmployeeServiceError(Exception):
    """Base exception for all employee records errors."""

    status_code: int = 500

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationFailedError(EmployeeServiceError):
    """Raised when a candidate employee record breaks field constraints."""

    status_code = 400

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Validation error", {"errors": self.errors})


class DuplicateEmailError(EmployeeServiceError):
    """Raised when another employee already uses the email."""

    status_code = 400

    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else {}
        super().__init__("Employee with this email already exists", details)


class EmployeeNotFoundError(EmployeeServiceError):
    """Raised when an employee id is absent or malformed."""

    status_code = 404

    def __init__(self, employee_id: Any = None) -> None:
        details = {"employee_id": str(employee_id)} if employee_id is not None else {}
        super().__init__("Employee not found", details)


class UnauthenticatedError(EmployeeServiceError):
    """Raised when no identity accompanies the request."""

    status_code = 401

    def __init__(self) -> None:
        super().__init__("Authentication required")


class ForbiddenError(EmployeeServiceError):
    """Raised when the identity's role does not allow the operation."""

    status_code = 403

    def __init__(self, message: str = "Admin access required") -> None:
        super().__init__(message)


class StoreUnavailableError(EmployeeServiceError):
    """Raised for unexpected storage or infrastructure failures."""

    status_code = 500

    def __init__(self, diagnostic: str) -> None:
        self.diagnostic = diagnostic
        super().__init__("Server error", {"error": diagnostic})
