"""Employee records service.

Wraps the repository with validation and transaction handling. Every write
takes a ``WriteGrant``; reads need nothing beyond a session.
"""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import (
    EmployeeNotFoundError,
    EmployeeServiceError,
    StoreUnavailableError,
)
from models.employee import Employee
from models.enums import Department, EmployeeStatus
from repositories.employee_repository import EmployeeRepository
from services.authorization import WriteGrant
from services.validation import merge_patch, normalize_employee, parse_employee

logger = logging.getLogger(__name__)

MAX_SEARCH_LENGTH = 200


def parse_employee_id(raw: Any) -> UUID:
    """Parse an employee id, treating malformed ids as missing records.

    Raises:
        EmployeeNotFoundError: If the value is not a UUID.
    """
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except ValueError as e:
        raise EmployeeNotFoundError(raw) from e


def sanitize_search(text: str | None) -> str | None:
    """Trim search text; blank text means no text filter."""
    if text is None:
        return None
    return text[:MAX_SEARCH_LENGTH].strip() or None


def to_candidate(employee: Employee) -> dict[str, Any]:
    """Express a stored employee in the API field names, for merging patches."""
    address = employee.address
    return {
        "firstName": employee.first_name,
        "lastName": employee.last_name,
        "email": employee.email,
        "phone": employee.phone,
        "department": employee.department,
        "position": employee.position,
        "salary": employee.salary,
        "dateOfJoining": employee.date_of_joining,
        "address": (
            {
                "street": address["street"],
                "city": address["city"],
                "state": address["state"],
                "zipCode": address["zip_code"],
            }
            if address
            else None
        ),
        "status": employee.status,
    }


class EmployeeService:
    """Create, read, update, delete and search employee records."""

    def __init__(self, db: Session):
        """Initialize the service with a database session.

        Args:
            db: SQLAlchemy database session.
        """
        self.db = db
        self.repo = EmployeeRepository(db)

    def create(self, record: Mapping[str, Any], grant: WriteGrant) -> Employee:
        """Validate and store a new employee.

        Args:
            record: Full employee payload in API field names.
            grant: Write permission of the creating identity.

        Returns:
            The stored Employee.

        Raises:
            ValidationFailedError: If the payload breaks any field rule.
            DuplicateEmailError: If the email is already used.
        """
        values = normalize_employee(parse_employee(record))

        with self._transaction():
            employee = self.repo.create(values, created_by=grant.editor_id)
        self.db.refresh(employee)
        return employee

    def get(self, employee_id: Any) -> Employee:
        """Fetch one employee.

        Raises:
            EmployeeNotFoundError: If the id is malformed or unknown.
        """
        employee = self.repo.get_by_id(parse_employee_id(employee_id))
        if employee is None:
            logger.warning("Employee not found: id=%s", employee_id)
            raise EmployeeNotFoundError(employee_id)
        return employee

    def list_all(self) -> list[Employee]:
        """All employees, most recently created first."""
        return self.repo.list_all()

    def update(self, employee_id: Any, patch: Mapping[str, Any], grant: WriteGrant) -> Employee:
        """Merge a patch over an employee and store the result.

        The merged record is validated as a whole, so a patch cannot clear a
        required field.

        Args:
            employee_id: ID of the employee to change.
            patch: Subset of the updatable fields.
            grant: Write permission of the editing identity.

        Returns:
            The updated Employee.

        Raises:
            EmployeeNotFoundError: If the id is malformed or unknown.
            ValidationFailedError: If the patch has unknown keys or the merged record is invalid.
            DuplicateEmailError: If the new email belongs to another employee.
        """
        parsed_id = parse_employee_id(employee_id)
        with self._transaction():
            employee = self.repo.get_by_id(parsed_id, for_update=True)
            if employee is None:
                raise EmployeeNotFoundError(employee_id)

            merged = merge_patch(to_candidate(employee), patch)
            self.repo.update(employee, normalize_employee(merged), updated_by=grant.editor_id)
        self.db.refresh(employee)
        return employee

    def delete(self, employee_id: Any, grant: WriteGrant) -> None:
        """Permanently delete an employee.

        Raises:
            EmployeeNotFoundError: If the id is malformed or unknown.
        """
        parsed_id = parse_employee_id(employee_id)
        with self._transaction():
            employee = self.repo.get_by_id(parsed_id, for_update=True)
            if employee is None:
                raise EmployeeNotFoundError(employee_id)
            self.repo.delete(employee)
        logger.info("Employee id=%s deleted by user_id=%s", parsed_id, grant.editor_id)

    def search(
        self,
        text: str | None = None,
        department: Department | None = None,
        status: EmployeeStatus | None = None,
    ) -> list[Employee]:
        """Filter employees by text, department and status.

        All filters are optional and combined with AND; with none given the
        result equals ``list_all()``.
        """
        return self.repo.search(
            text=sanitize_search(text),
            department=department,
            status=status,
        )

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Commit on success, roll back on any failure."""
        try:
            yield
            self.db.commit()
        except EmployeeServiceError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Database error during employee write")
            raise StoreUnavailableError(str(e)) from e
