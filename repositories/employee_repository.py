"""Repository for employee database operations."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import DuplicateEmailError
from models.base import utcnow
from models.employee import EMAIL_CONSTRAINT, Employee
from models.enums import Department, EmployeeStatus

logger = logging.getLogger(__name__)

SEARCHABLE_COLUMNS = (
    Employee.first_name,
    Employee.last_name,
    Employee.email,
    Employee.position,
)


def escape_like_wildcards(value: str) -> str:
    """Escape LIKE wildcards so they match literally.

    Args:
        value: Raw search text.

    Returns:
        Text with backslash, percent and underscore escaped by a backslash.
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _is_email_conflict(error: IntegrityError) -> bool:
    text = str(error.orig).lower()
    return EMAIL_CONSTRAINT in text or "employees.email" in text


class EmployeeRepository:
    """Data access layer for employee records."""

    def __init__(self, db: Session):
        """Initialize repository with database session.

        Args:
            db: SQLAlchemy database session.
        """
        self.db = db

    def get_by_id(self, employee_id: UUID, for_update: bool = False) -> Employee | None:
        """Get an employee by ID.

        Args:
            employee_id: The employee's UUID.
            for_update: Lock the row until the transaction ends.

        Returns:
            Employee record if it exists, None otherwise.
        """
        query = self.db.query(Employee).filter(Employee.id == employee_id)
        if for_update:
            query = query.with_for_update(of=Employee)
        return query.first()

    def list_all(self) -> list[Employee]:
        """Get all employees, most recently created first."""
        return self.db.query(Employee).order_by(Employee.created_at.desc()).all()

    def search(
        self,
        text: str | None = None,
        department: Department | None = None,
        status: EmployeeStatus | None = None,
    ) -> list[Employee]:
        """Filter employees.

        Args:
            text: Case-insensitive substring of first name, last name, email or position.
            department: Exact department.
            status: Exact status.

        Returns:
            Matching employees, most recently created first.
        """
        query = self.db.query(Employee)
        if text:
            pattern = f"%{escape_like_wildcards(text)}%"
            query = query.filter(
                or_(*(column.ilike(pattern, escape="\\") for column in SEARCHABLE_COLUMNS))
            )
        if department is not None:
            query = query.filter(Employee.department == department)
        if status is not None:
            query = query.filter(Employee.status == status)
        return query.order_by(Employee.created_at.desc()).all()

    def create(self, values: dict[str, Any], created_by: int) -> Employee:
        """Insert a new employee.

        Args:
            values: Normalized column values.
            created_by: ID of the user creating the record.

        Returns:
            The created Employee record.

        Raises:
            DuplicateEmailError: If the email is already taken.
        """
        employee = Employee(**values, created_by=created_by)
        self.db.add(employee)
        self._flush(values.get("email"))
        logger.info(
            "Created employee: id=%s by user_id=%s",
            employee.id,
            created_by,
        )
        return employee

    def update(self, employee: Employee, values: dict[str, Any], updated_by: int) -> Employee:
        """Apply new column values to an employee.

        Args:
            employee: The record to update.
            values: Normalized column values.
            updated_by: ID of the user updating the record.

        Returns:
            The updated Employee record.

        Raises:
            DuplicateEmailError: If the new email belongs to another employee.
        """
        for column, value in values.items():
            setattr(employee, column, value)
        employee.updated_by = updated_by
        employee.updated_at = utcnow()
        self._flush(values.get("email"))
        logger.info(
            "Updated employee: id=%s by user_id=%s",
            employee.id,
            updated_by,
        )
        return employee

    def delete(self, employee: Employee) -> None:
        """Permanently remove an employee."""
        self.db.delete(employee)
        self.db.flush()

    def _flush(self, email: str | None) -> None:
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            if _is_email_conflict(e):
                logger.warning("Rejected duplicate employee email: %s", email)
                raise DuplicateEmailError(email) from e
            raise
