"""SQLAlchemy base class and mixins."""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, relationship

# BIGINT primary keys only autoincrement as INTEGER on SQLite
UserIdType = BigInteger().with_variant(Integer(), "sqlite")


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base class."""

    pass


class ModifyModel:
    """Mixin for audit trail columns (created/updated timestamps and user references).

    The created_by and updated_by columns reference the externally managed
    users table. created_by is mandatory and written once; updated_by is only
    set when a record is modified.
    """

    created_at: Mapped[datetime] = Column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )

    updated_at: Mapped[datetime] = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    @declared_attr
    def created_by(cls) -> Mapped[int]:
        """User ID who created the record."""
        return Column(
            UserIdType,
            ForeignKey("users.id"),
            nullable=False,
        )

    @declared_attr
    def updated_by(cls) -> Mapped[int | None]:
        """User ID who last updated the record."""
        return Column(
            UserIdType,
            ForeignKey("users.id"),
            nullable=True,
        )

    @declared_attr
    def creator(cls):
        """Relationship to the creating user."""
        return relationship(
            "User",
            foreign_keys=[cls.created_by],
            lazy="joined",
        )

    @declared_attr
    def updater(cls):
        """Relationship to the last updating user."""
        return relationship(
            "User",
            foreign_keys=[cls.updated_by],
            lazy="joined",
        )
