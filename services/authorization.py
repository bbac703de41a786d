"""Role policy for employee records.

Any authenticated identity may read. Only admins may create, update or
delete; write operations take a ``WriteGrant`` that only
``authorize_write`` hands out.
"""

import logging
from dataclasses import dataclass

from app.exceptions import ForbiddenError, UnauthenticatedError
from models.enums import UserRole
from schemas.identity import Identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteGrant:
    """Permission to write employee records on behalf of an identity."""

    editor_id: int


def can_read(identity: Identity | None) -> bool:
    """Return whether the identity may list, fetch and search employees."""
    return identity is not None


def can_write(identity: Identity | None) -> bool:
    """Return whether the identity may create, update and delete employees."""
    return identity is not None and identity.role == UserRole.ADMIN


def authorize_read(identity: Identity | None) -> Identity:
    """Ensure the caller may read.

    Raises:
        UnauthenticatedError: If there is no identity.
    """
    if not can_read(identity):
        raise UnauthenticatedError()
    return identity


def authorize_write(identity: Identity | None) -> WriteGrant:
    """Issue a write grant for an admin identity.

    Raises:
        UnauthenticatedError: If there is no identity.
        ForbiddenError: If the identity is not an admin.
    """
    if identity is None:
        raise UnauthenticatedError()
    if not can_write(identity):
        logger.warning(
            "Write denied for user_id=%s with role=%s",
            identity.user_id,
            identity.role.value,
        )
        raise ForbiddenError()
    return WriteGrant(editor_id=identity.user_id)
