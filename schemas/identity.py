"""Authenticated caller schema."""

from pydantic import BaseModel, ConfigDict, Field

from models.enums import UserRole


class Identity(BaseModel):
    """Caller resolved by the authentication layer."""

    model_config = ConfigDict(frozen=True)

    user_id: int = Field(description="ID of the user row backing the token")
    email: str = Field(description="Email the token was issued to")
    role: UserRole = Field(description="Role deciding write access")
