"""Schemas package."""

from schemas.employee import (
    AddressSchema,
    EmployeeCreate,
    EmployeeEnvelope,
    EmployeeListEnvelope,
    EmployeeMessageEnvelope,
    EmployeeResponse,
    EmployeeUpdate,
    ErrorEnvelope,
    MessageEnvelope,
    UserSummary,
)
from schemas.identity import Identity

__all__ = [
    "AddressSchema",
    "EmployeeCreate",
    "EmployeeEnvelope",
    "EmployeeListEnvelope",
    "EmployeeMessageEnvelope",
    "EmployeeResponse",
    "EmployeeUpdate",
    "ErrorEnvelope",
    "Identity",
    "MessageEnvelope",
    "UserSummary",
]
