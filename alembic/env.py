"""Alembic environment configuration.

This module configures Alembic to:
1. Manage the employees table and its indexes
2. Never touch the externally managed users table
"""

import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import create_engine, pool

# Add the project root to sys.path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import settings
from models.base import Base

# Import all models to ensure they are registered with Base.metadata
from models.employee import Employee  # noqa: F401
from models.user import User  # noqa: F401

# Tables owned by another system
EXTERNAL_TABLES = {"users"}

# Alembic Config object
config = context.config

# Setup logging from config file
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Set the SQLAlchemy URL from settings
config.set_main_option("sqlalchemy.url", settings.database_url)

# Target metadata for autogenerate
target_metadata = Base.metadata


def include_object(
    obj,
    name: str,
    type_: str,
    reflected: bool,
    compare_to,
) -> bool:
    """Filter function excluding externally managed tables.

    Tables in EXTERNAL_TABLES, and indexes or constraints on them, are
    never created, altered or dropped by autogenerate.
    """
    if type_ == "table":
        return name not in EXTERNAL_TABLES

    table = getattr(obj, "table", None)
    if table is not None:
        return table.name not in EXTERNAL_TABLES

    return True


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Generates SQL script without database connection.
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode.

    Creates database connection and runs migrations.
    """
    connectable = create_engine(
        config.get_main_option("sqlalchemy.url"),
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_object=include_object,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
