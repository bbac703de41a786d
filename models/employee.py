"""Employee model."""

import uuid

from sqlalchemy import CheckConstraint, Column, Date, Enum, Numeric, String, Text, UniqueConstraint, Uuid

from models.base import Base, ModifyModel
from models.enums import Department, EmployeeStatus

EMAIL_CONSTRAINT = "uq_employees_email"


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class Employee(ModifyModel, Base):
    """Employee record.

    Email is stored lower-cased and is unique across all rows; the unique
    constraint is what guards concurrent writes.
    """

    __tablename__ = "employees"
    __table_args__ = (
        UniqueConstraint("email", name=EMAIL_CONSTRAINT),
        CheckConstraint("salary >= 0", name="ck_employees_salary_non_negative"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(String(10), nullable=False)
    department = Column(
        Enum(
            Department,
            name="employee_department",
            native_enum=False,
            create_constraint=True,
            values_callable=_enum_values,
            length=20,
        ),
        nullable=False,
        index=True,
    )
    position = Column(Text, nullable=False)
    salary = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    date_of_joining = Column(Date, nullable=False)
    address_street = Column(Text)
    address_city = Column(Text)
    address_state = Column(Text)
    address_zip_code = Column(Text)
    status = Column(
        Enum(
            EmployeeStatus,
            name="employee_status",
            native_enum=False,
            create_constraint=True,
            values_callable=_enum_values,
            length=20,
        ),
        nullable=False,
        default=EmployeeStatus.ACTIVE,
        index=True,
    )

    @property
    def address(self) -> dict | None:
        """Nested address view of the four address columns."""
        parts = {
            "street": self.address_street,
            "city": self.address_city,
            "state": self.address_state,
            "zip_code": self.address_zip_code,
        }
        if all(value is None for value in parts.values()):
            return None
        return parts
