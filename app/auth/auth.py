"""JWT token authentication using Azure AD / OpenID Connect.

This module provides authentication via Bearer tokens validated against
the identity provider's OIDC configuration. The token_required dependency
must be used on every employee endpoint; it resolves the caller to an
Identity carrying the role the authorization policy decides on.
"""

import logging
from datetime import datetime
from typing import Annotated

import jwt
import pytz
import requests
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from config.database import get_db
from config.settings import settings
from models.enums import UserRole
from models.user import User
from schemas.identity import Identity

logger = logging.getLogger(__name__)

# Claims that may carry the user's email, in order of preference
SUBJECT_CLAIMS = ("unique_name", "upn", "email", "preferred_username")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_openid_config() -> dict:
    """Fetch OpenID Connect configuration from the identity provider.

    Returns:
        dict: The OpenID configuration containing endpoints and settings.

    Raises:
        HTTPException: If the configuration cannot be fetched.
    """
    if not settings.openid_config_url:
        raise HTTPException(status_code=500, detail="OIDC configuration URL not set")
    resp = requests.get(settings.openid_config_url, timeout=settings.http_timeout_seconds)
    if resp.status_code != 200:
        raise HTTPException(status_code=500, detail="Failed to fetch OpenID config")
    return resp.json()


def get_jwks(jwks_uri: str) -> dict:
    """Fetch the JSON Web Key Set published by the identity provider."""
    return requests.get(jwks_uri, timeout=settings.http_timeout_seconds).json()


def get_signing_key(kid: str, jwks: dict):
    """Extract the signing key matching the key ID from JWKS.

    Args:
        kid: Key ID from the JWT header.
        jwks: JSON Web Key Set from the identity provider.

    Returns:
        The RSA public key for signature verification, or None if not found.
    """
    keys = jwks.get("keys", [])
    for key in keys:
        if key.get("kid") == kid:
            return jwt.algorithms.RSAAlgorithm.from_jwk(key)
    return None


def get_user_by_email(db: Session, email: str) -> User | None:
    """Look up an active user by email address.

    Args:
        db: Database session.
        email: Email address to search for (case-insensitive).

    Returns:
        User record if found and active, None otherwise.
    """
    return (
        db.query(User)
        .filter(func.lower(User.email) == email.lower())
        .filter(User.is_active.is_(True))
        .first()
    )


def resolve_role(value: str | None) -> UserRole:
    """Map a stored role to UserRole; unknown roles get no write access."""
    try:
        return UserRole((value or "").lower())
    except ValueError:
        logger.warning("Unknown user role %r, treating as regular user", value)
        return UserRole.USER


def validate_token(token: str, db: Session) -> Identity:
    """Validate a JWT token against the identity provider.

    Args:
        token: The JWT token string to validate.
        db: Database session for user lookup.

    Returns:
        Identity of the caller.

    Raises:
        HTTPException: For various authentication failures.
    """
    if not token:
        raise _unauthorized("Authentication Token is missing!")

    try:
        openid_config = get_openid_config()
        jwks_uri = openid_config.get("jwks_uri")
        if not jwks_uri:
            raise HTTPException(status_code=500, detail="JWKS URI missing in OIDC config")
        jwks = get_jwks(jwks_uri)

        unverified_header = jwt.get_unverified_header(token)
        kid = unverified_header.get("kid")
        if not kid:
            raise _unauthorized("Invalid token: Missing Key ID (kid)")

        signing_key = get_signing_key(kid, jwks)
        if not signing_key:
            raise _unauthorized("Invalid token: Key not found in JWKS")

        decoded_token = jwt.decode(
            token,
            signing_key,
            algorithms=["RS256"],
            audience=settings.valid_audience,
            issuer=settings.valid_issuer,
        )

        app_id = decoded_token.get("appid")
        tid = decoded_token.get("tid")

        if (settings.client_id and app_id != settings.client_id) or (
            settings.tenant_id and tid != settings.tenant_id
        ):
            raise _unauthorized("Invalid token: Unauthorized app or tenant")

        exp_time = datetime.fromtimestamp(decoded_token["exp"], pytz.timezone(settings.timezone))
        current_time = datetime.now(pytz.timezone(settings.timezone))
        if current_time > exp_time:
            raise _unauthorized("Authentication Token Has Expired!")

        subject = next((decoded_token[c] for c in SUBJECT_CLAIMS if decoded_token.get(c)), None)
        if not subject:
            raise _unauthorized("Invalid Token: unique_name missing")

        current_user = get_user_by_email(db, subject)
        if current_user is None:
            raise _unauthorized("Invalid Token")

        return Identity(
            user_id=current_user.id,
            email=current_user.email,
            role=resolve_role(current_user.role),
        )
    except jwt.ExpiredSignatureError as e:
        raise _unauthorized("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise _unauthorized(f"Token validation failed: {str(e)}") from e
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unexpected authentication failure")
        raise HTTPException(status_code=500, detail=f"Authentication error: {str(e)}") from e


def token_required(
    authorization: Annotated[str | None, Header()] = None,
    db: Annotated[Session, Depends(get_db)] = None,
) -> Identity:
    """FastAPI dependency for requiring valid authentication.

    Validates the Bearer token and returns the caller's identity.

    Args:
        authorization: The Authorization header value.
        db: Database session (injected).

    Returns:
        Identity of the authenticated caller.

    Raises:
        HTTPException: If authentication fails.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise _unauthorized("Authorization header missing or malformed")

    token = authorization.split(" ", 1)[1].strip()
    return validate_token(token, db)
