"""Pydantic schemas for user API."""

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Request for sign-up."""

    email: str = Field(..., min_length=1, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class UserUpdate(BaseModel):
    """Request for a profile update. Empty fields are left unchanged."""

    email: str = Field(default="", max_length=254)
    password: str = Field(default="", max_length=128)


class UserResponse(BaseModel):
    """Response with user information. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    is_upgraded: bool
