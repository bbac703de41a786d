"""Authentication module."""

from app.auth.auth import get_user_by_email, token_required, validate_token

__all__ = ["get_user_by_email", "token_required", "validate_token"]
