"""Pydantic schemas for login and token claims."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
    turnstile_token: Optional[str] = None


class TokenResponse(BaseModel):
    access_token: str = Field(serialization_alias="accessToken")

    model_config = ConfigDict(populate_by_name=True)


class TokenClaims(BaseModel):
    """Decoded access token. Permissions are a snapshot taken at login."""

    sub: UUID
    email: str
    role: str
    permissions: list[str] = Field(default_factory=list)
    exp: Optional[int] = None

    def has_permission(self, key: str) -> bool:
        return key in self.permissions
