"""Pydantic schemas for chirp API."""

from pydantic import BaseModel, ConfigDict


class ChirpCreate(BaseModel):
    """Request to post a chirp. Length is checked by the endpoint."""

    body: str


class ChirpResponse(BaseModel):
    """A chirp as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    body: str
    author_id: int
