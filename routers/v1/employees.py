"""Employee API endpoints."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from app.auth.auth import token_required
from app.exceptions import EmployeeServiceError, StoreUnavailableError
from config.database import get_db
from models.enums import Department, EmployeeStatus
from schemas.employee import (
    EMPLOYEE_EXAMPLE,
    EmployeeEnvelope,
    EmployeeListEnvelope,
    EmployeeMessageEnvelope,
    EmployeeResponse,
    ErrorEnvelope,
    MessageEnvelope,
)
from schemas.identity import Identity
from services.authorization import authorize_read, authorize_write
from services.employee_service import EmployeeService, sanitize_search

logger = logging.getLogger(__name__)

router = APIRouter()

READ_RESPONSES = {
    401: {"model": ErrorEnvelope, "description": "Authentication failed"},
    500: {"model": ErrorEnvelope, "description": "Internal server error"},
}

WRITE_RESPONSES = {
    **READ_RESPONSES,
    400: {"model": ErrorEnvelope, "description": "Validation error or duplicate email"},
    403: {"model": ErrorEnvelope, "description": "Admin access required"},
}


@contextmanager
def store_errors(db: Session, action: str) -> Iterator[None]:
    """Let domain errors through; wrap anything else as a store failure."""
    try:
        yield
    except EmployeeServiceError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.exception("Unexpected error while %s", action)
        raise StoreUnavailableError(str(e)) from e


def _list_envelope(employees: list) -> EmployeeListEnvelope:
    data = [EmployeeResponse.model_validate(employee) for employee in employees]
    return EmployeeListEnvelope(count=len(data), data=data)


@router.get(
    "",
    response_model=EmployeeListEnvelope,
    summary="List employees",
    description="Return every employee, most recently created first.",
    responses=READ_RESPONSES,
)
def list_employees(
    identity: Annotated[Identity, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> EmployeeListEnvelope:
    """List all employees."""
    authorize_read(identity)
    with store_errors(db, "listing employees"):
        employees = EmployeeService(db).list_all()
    return _list_envelope(employees)


@router.get(
    "/search",
    response_model=EmployeeListEnvelope,
    summary="Search employees",
    description="""
    Filter employees. `text` matches first name, last name, email or position
    case-insensitively; `department` and `status` must match exactly. All
    filters are combined with AND. Without filters every employee is returned.
    """,
    responses={
        **READ_RESPONSES,
        400: {"model": ErrorEnvelope, "description": "Unknown department or status"},
    },
)
def search_employees(
    identity: Annotated[Identity, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
    text: Annotated[str | None, Query(description="Substring to look for")] = None,
    query: Annotated[str | None, Query(description="Alias of text")] = None,
    department: Annotated[Department | None, Query(description="Exact department")] = None,
    employee_status: Annotated[
        EmployeeStatus | None,
        Query(alias="status", description="Exact status"),
    ] = None,
) -> EmployeeListEnvelope:
    """Search employees by text, department and status.

    Args:
        identity: Authenticated caller.
        db: Database session.
        text: Case-insensitive substring filter.
        query: Same as text; used when text is absent or blank.
        department: Department filter.
        employee_status: Status filter.

    Returns:
        Matching employees in list order.
    """
    authorize_read(identity)
    with store_errors(db, "searching employees"):
        employees = EmployeeService(db).search(
            text=sanitize_search(text) or sanitize_search(query),
            department=department,
            status=employee_status,
        )
    return _list_envelope(employees)


@router.get(
    "/{employee_id}",
    response_model=EmployeeEnvelope,
    summary="Get employee",
    responses={
        **READ_RESPONSES,
        404: {"model": ErrorEnvelope, "description": "Employee not found"},
    },
)
def get_employee(
    employee_id: str,
    identity: Annotated[Identity, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> EmployeeEnvelope:
    """Fetch one employee; malformed ids are reported as not found."""
    authorize_read(identity)
    with store_errors(db, "fetching an employee"):
        employee = EmployeeService(db).get(employee_id)
    return EmployeeEnvelope(data=EmployeeResponse.model_validate(employee))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=EmployeeMessageEnvelope,
    summary="Create employee",
    description="""
    Create an employee from a full record (`EmployeeCreate`). Admin only.

    The email is lower-cased before storage and must not belong to another
    employee. `status` defaults to `Active`.
    """,
    responses=WRITE_RESPONSES,
)
def create_employee(
    payload: Annotated[dict[str, Any], Body(examples=[EMPLOYEE_EXAMPLE])],
    identity: Annotated[Identity, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> EmployeeMessageEnvelope:
    """Create an employee.

    Args:
        payload: Full employee record.
        identity: Authenticated caller; must be an admin.
        db: Database session.

    Returns:
        The stored employee.
    """
    grant = authorize_write(identity)
    logger.info("Creating employee for user_id=%s", identity.user_id)

    with store_errors(db, "creating an employee"):
        employee = EmployeeService(db).create(payload, grant)

    return EmployeeMessageEnvelope(
        message="Employee created successfully",
        data=EmployeeResponse.model_validate(employee),
    )


@router.put(
    "/{employee_id}",
    response_model=EmployeeMessageEnvelope,
    summary="Update employee",
    description="""
    Apply a partial or full record. Admin only.

    Only firstName, lastName, email, phone, department, position, salary,
    dateOfJoining, address and status may be sent. The merged record is
    validated as a whole (`EmployeeUpdate`); a null status is rejected.
    """,
    responses={
        **WRITE_RESPONSES,
        404: {"model": ErrorEnvelope, "description": "Employee not found"},
    },
)
def update_employee(
    employee_id: str,
    payload: Annotated[dict[str, Any], Body(examples=[{"position": "Senior Developer", "salary": 1500}])],
    identity: Annotated[Identity, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> EmployeeMessageEnvelope:
    """Update an employee.

    Args:
        employee_id: ID of the employee.
        payload: Fields to change.
        identity: Authenticated caller; must be an admin.
        db: Database session.

    Returns:
        The updated employee.
    """
    grant = authorize_write(identity)
    logger.info("Updating employee id=%s for user_id=%s", employee_id, identity.user_id)

    with store_errors(db, "updating an employee"):
        employee = EmployeeService(db).update(employee_id, payload, grant)

    return EmployeeMessageEnvelope(
        message="Employee updated successfully",
        data=EmployeeResponse.model_validate(employee),
    )


@router.delete(
    "/{employee_id}",
    response_model=MessageEnvelope,
    summary="Delete employee",
    description="Permanently delete an employee. Admin only.",
    responses={
        **WRITE_RESPONSES,
        404: {"model": ErrorEnvelope, "description": "Employee not found"},
    },
)
def delete_employee(
    employee_id: str,
    identity: Annotated[Identity, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageEnvelope:
    """Delete an employee."""
    grant = authorize_write(identity)

    with store_errors(db, "deleting an employee"):
        EmployeeService(db).delete(employee_id, grant)

    return MessageEnvelope(message="Employee deleted successfully")
