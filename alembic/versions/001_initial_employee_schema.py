"""Initial employee schema

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19

This migration:
1. Creates the employees table with its email unique constraint
2. Creates indexes for list ordering and search filters

The users table referenced by created_by/updated_by is managed externally.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEPARTMENTS = ("IT", "HR", "Finance", "Marketing", "Sales", "Operations", "Engineering")
STATUSES = ("Active", "Inactive", "On Leave")


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("phone", sa.String(10), nullable=False),
        sa.Column(
            "department",
            sa.Enum(*DEPARTMENTS, name="employee_department", native_enum=False, create_constraint=True, length=20),
            nullable=False,
        ),
        sa.Column("position", sa.Text(), nullable=False),
        sa.Column("salary", sa.Numeric(12, 2), nullable=False),
        sa.Column("date_of_joining", sa.Date(), nullable=False),
        sa.Column("address_street", sa.Text(), nullable=True),
        sa.Column("address_city", sa.Text(), nullable=True),
        sa.Column("address_state", sa.Text(), nullable=True),
        sa.Column("address_zip_code", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.Enum(*STATUSES, name="employee_status", native_enum=False, create_constraint=True, length=20),
            nullable=False,
            server_default="Active",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("created_by", sa.BigInteger(), nullable=False),
        sa.Column("updated_by", sa.BigInteger(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_employees_email"),
        sa.CheckConstraint("salary >= 0", name="ck_employees_salary_non_negative"),
        sa.ForeignKeyConstraint(
            ["created_by"],
            ["users.id"],
            name="fk_employees_created_by",
        ),
        sa.ForeignKeyConstraint(
            ["updated_by"],
            ["users.id"],
            name="fk_employees_updated_by",
        ),
    )

    # Create indexes for common queries
    op.create_index("ix_employees_created_at", "employees", ["created_at"])
    op.create_index("ix_employees_department", "employees", ["department"])
    op.create_index("ix_employees_status", "employees", ["status"])


def downgrade() -> None:
    # Drop indexes
    op.drop_index("ix_employees_status", table_name="employees")
    op.drop_index("ix_employees_department", table_name="employees")
    op.drop_index("ix_employees_created_at", table_name="employees")

    # Drop tables
    op.drop_table("employees")
