"""User model for authenticated identities.

This model represents the users table owned by the identity provider side.
DO NOT modify this table through migrations - it is managed externally.
"""

from sqlalchemy import Boolean, Column, String, Text

from models.base import Base, UserIdType


class User(Base):
    """Identity record referenced by employee audit columns.

    This is an externally managed table. Migrations must not create, alter, or drop it.
    """

    __tablename__ = "users"

    id = Column(UserIdType, primary_key=True, index=True)
    username = Column(String(255), nullable=False)
    email = Column(Text, unique=True, nullable=False)
    role = Column(String(20), nullable=False, default="user")
    is_active = Column(Boolean, default=True)
