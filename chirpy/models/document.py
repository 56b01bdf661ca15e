"""The whole persisted state, read and written in full on every operation."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from chirpy.models.chirp import Chirp
from chirpy.models.user import UserRecord

SCHEMA_VERSION = 1


class Document(BaseModel):
    """Top-level JSON document.

    Every collection is optional on disk: a missing key or an explicit
    ``null`` loads as an empty collection, so ``{}`` is a valid empty store.
    The id counters are monotonic and persisted so ids are never reused after
    a delete. Documents written before the counters existed get them derived
    from the highest stored id.
    """

    schema_version: int = SCHEMA_VERSION
    next_chirp_id: int = Field(default=1, ge=1)
    next_user_id: int = Field(default=1, ge=1)
    chirps: dict[int, Chirp] = Field(default_factory=dict)
    users: dict[int, UserRecord] = Field(default_factory=dict)
    revoked_tokens: dict[str, datetime] = Field(default_factory=dict)

    @field_validator("chirps", "users", "revoked_tokens", mode="before")
    @classmethod
    def _null_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @model_validator(mode="after")
    def _advance_counters(self) -> "Document":
        if self.chirps:
            self.next_chirp_id = max(self.next_chirp_id, max(self.chirps) + 1)
        if self.users:
            self.next_user_id = max(self.next_user_id, max(self.users) + 1)
        return self

    def allocate_chirp_id(self) -> int:
        chirp_id = self.next_chirp_id
        self.next_chirp_id += 1
        return chirp_id

    def allocate_user_id(self) -> int:
        user_id = self.next_user_id
        self.next_user_id += 1
        return user_id
