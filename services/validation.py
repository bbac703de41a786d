"""Field rules for employee records.

The rules themselves live on the ``EmployeeCreate`` and ``EmployeeUpdate``
schemas. This module turns pydantic errors into the messages clients see,
one per field in field order, and converts a parsed record into column
values.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from app.exceptions import ValidationFailedError
from schemas.employee import EmployeeCreate, EmployeeUpdate

REQUIRED = "missing"
OTHER = "*"

# Messages per API field, keyed by pydantic error type
FIELD_MESSAGES: dict[str, dict[str, str]] = {
    "firstName": {
        REQUIRED: "First name is required",
        OTHER: "First name must be at least 2 characters long",
    },
    "lastName": {
        REQUIRED: "Last name is required",
        OTHER: "Last name must be at least 2 characters long",
    },
    "email": {
        REQUIRED: "Email is required",
        OTHER: "Please enter a valid email",
    },
    "phone": {
        REQUIRED: "Phone number is required",
        OTHER: "Please enter a valid 10-digit phone number",
    },
    "department": {
        REQUIRED: "Department is required",
        OTHER: "{input} is not a valid department",
    },
    "position": {
        OTHER: "Position is required",
    },
    "salary": {
        REQUIRED: "Salary is required",
        "greater_than_equal": "Salary cannot be negative",
        "less_than": "Salary must be less than 10000000000",
        "decimal_max_places": "Salary cannot have more than 2 decimal places",
        OTHER: "Salary must be a number",
    },
    "dateOfJoining": {
        REQUIRED: "Date of joining is required",
        OTHER: "Date of joining must be a valid date",
    },
    "address": {
        OTHER: "Address must be an object with street, city, state and zipCode",
    },
    "status": {
        REQUIRED: "Status is required",
        OTHER: "{input} is not a valid status",
    },
}


def _is_blank(error: Mapping[str, Any]) -> bool:
    value = error.get("input")
    return error["type"] == "missing" or (isinstance(value, str) and not value.strip())


def _message(error: Mapping[str, Any]) -> str:
    loc = error["loc"]
    if not loc:
        return "Employee must be a JSON object"
    field = str(loc[0])
    if error["type"] == "extra_forbidden" and len(loc) == 1:
        return f"{field} is not an updatable field"
    messages = FIELD_MESSAGES.get(field)
    if messages is None:
        return f"{field}: {error['msg']}"
    kind = REQUIRED if _is_blank(error) else error["type"]
    template = messages.get(kind, messages[OTHER])
    return template.format(input=error.get("input"))


def error_messages(exc: ValidationError) -> list[str]:
    """One message per offending field, in the order pydantic reports them."""
    messages: list[str] = []
    seen: set[Any] = set()
    for error in exc.errors():
        field = error["loc"][0] if error["loc"] else None
        if field in seen:
            continue
        seen.add(field)
        messages.append(_message(error))
    return messages


def parse_employee(candidate: Any, schema: type[EmployeeCreate] = EmployeeCreate) -> EmployeeCreate:
    """Validate a candidate record.

    Args:
        candidate: Record keyed by the camelCase API field names.
        schema: ``EmployeeCreate`` for new records, ``EmployeeUpdate`` for a
            patch merged over a stored record.

    Raises:
        ValidationFailedError: Carrying every field message.
    """
    try:
        return schema.model_validate(candidate)
    except ValidationError as e:
        raise ValidationFailedError(error_messages(e)) from e


def validate_employee(candidate: Any, schema: type[EmployeeCreate] = EmployeeCreate) -> list[str]:
    """Ordered error messages for a candidate; empty when it is valid."""
    try:
        schema.model_validate(candidate)
    except ValidationError as e:
        return error_messages(e)
    return []


def merge_patch(current: Mapping[str, Any], patch: Any) -> EmployeeUpdate:
    """Apply a client patch over a stored record and validate the result.

    Raises:
        ValidationFailedError: If the patch is not an object, has keys that
            may not be updated, or leaves the record invalid.
    """
    if not isinstance(patch, Mapping):
        raise ValidationFailedError(["Employee must be a JSON object"])
    return parse_employee({**current, **patch}, EmployeeUpdate)


def normalize_employee(record: EmployeeCreate) -> dict[str, Any]:
    """Convert a parsed record into model column values."""
    address = record.address
    return {
        "first_name": record.first_name,
        "last_name": record.last_name,
        "email": record.email.lower(),
        "phone": record.phone,
        "department": record.department,
        "position": record.position,
        "salary": float(record.salary),
        "date_of_joining": record.date_of_joining,
        "address_street": address.street if address else None,
        "address_city": address.city if address else None,
        "address_state": address.state if address else None,
        "address_zip_code": address.zip_code if address else None,
        "status": record.status,
    }
