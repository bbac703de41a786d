"""Pydantic schemas for employee API requests and responses."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from models.enums import Department, EmployeeStatus

# Largest salary the numeric(12, 2) column holds, exclusive
MAX_SALARY = Decimal("10000000000")

_DATETIME = TypeAdapter(datetime)


class CamelModel(BaseModel):
    """Base schema serialized with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AddressSchema(CamelModel):
    """Postal address of an employee. All parts are free text."""

    model_config = ConfigDict(extra="forbid")

    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None


class EmployeeCreate(CamelModel):
    """Full employee record sent by a client.

    A ``null`` value counts as absent. Unknown keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=False, str_strip_whitespace=True)

    first_name: str = Field(min_length=2, description="At least 2 characters after trimming")
    last_name: str = Field(min_length=2, description="At least 2 characters after trimming")
    email: EmailStr = Field(description="Stored lower-cased; unique across employees")
    phone: str = Field(pattern=r"^[0-9]{10}$", description="Exactly 10 digits")
    department: Department
    position: str = Field(min_length=1)
    salary: Decimal = Field(ge=0, lt=MAX_SALARY, decimal_places=2, description="Numbers or numeric strings")
    date_of_joining: date = Field(description="ISO date; a datetime is truncated to its date")
    address: AddressSchema | None = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("salary", mode="before")
    @classmethod
    def coerce_salary(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("Salary must be a number")
        # Shortest repr, so 0.1 has one decimal place
        if isinstance(value, float):
            return repr(value)
        return value

    @field_validator("date_of_joining", mode="before")
    @classmethod
    def truncate_datetime(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            try:
                return _DATETIME.validate_python(value.strip()).date()
            except ValidationError as e:
                raise ValueError("Date of joining must be a valid date") from e
        return value


class EmployeeUpdate(EmployeeCreate):
    """An existing record with a client patch merged over it.

    Only the business fields may appear; any other key is rejected. Status
    has no default here, so a patch cannot clear it.
    """

    model_config = ConfigDict(extra="forbid")

    status: EmployeeStatus


class UserSummary(CamelModel):
    """Identity referenced by an employee's audit columns."""

    id: int
    username: str
    email: str


class EmployeeResponse(CamelModel):
    """Stored employee record."""

    id: UUID = Field(description="Store-assigned identifier")
    first_name: str
    last_name: str
    email: str = Field(description="Lower-cased, unique across employees")
    phone: str = Field(description="Exactly 10 digits")
    department: Department
    position: str
    salary: float
    date_of_joining: date
    address: AddressSchema | None = None
    status: EmployeeStatus
    created_by: int = Field(description="ID of the user who created the record")
    updated_by: int | None = Field(default=None, description="ID of the user who last updated the record")
    creator: UserSummary | None = None
    updater: UserSummary | None = None
    created_at: datetime
    updated_at: datetime


class EmployeeEnvelope(CamelModel):
    """Single employee response."""

    success: bool = True
    data: EmployeeResponse


class EmployeeMessageEnvelope(CamelModel):
    """Single employee response after a write."""

    success: bool = True
    message: str
    data: EmployeeResponse


class EmployeeListEnvelope(CamelModel):
    """Employee list response."""

    success: bool = True
    count: int
    data: list[EmployeeResponse]


class MessageEnvelope(CamelModel):
    """Response carrying only a message."""

    success: bool = True
    message: str


class ErrorEnvelope(CamelModel):
    """Standard error response schema."""

    success: bool = False
    message: str = Field(description="Error message")
    errors: list[str] | None = Field(default=None, description="Field errors for validation failures")
    error: str | None = Field(default=None, description="Diagnostic text for unexpected failures")


EMPLOYEE_EXAMPLE = {
    "firstName": "Jo",
    "lastName": "Lee",
    "email": "jo@example.com",
    "phone": "1234567890",
    "department": "IT",
    "position": "Developer",
    "salary": 1000,
    "dateOfJoining": "2024-01-01",
    "address": {
        "street": "1 Main Street",
        "city": "Pune",
        "state": "MH",
        "zipCode": "411001",
    },
    "status": "Active",
}
