"""Pydantic schemas for authentication API."""

from pydantic import BaseModel, Field

from chirpy.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Request for login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(UserResponse):
    """Public user plus a fresh token pair."""

    token: str = Field(description="Access token, valid for one hour by default")
    refresh_token: str = Field(description="Refresh token, valid for sixty days by default")


class RefreshResponse(BaseModel):
    """Response with a new access token."""

    token: str
