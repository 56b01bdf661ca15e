"""Chirp record - a short post authored by a user."""

from pydantic import BaseModel, ConfigDict


class Chirp(BaseModel):
    """A stored chirp. Never edited after creation."""

    model_config = ConfigDict(frozen=True)

    id: int
    body: str
    author_id: int
