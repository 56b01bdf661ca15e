"""User record as persisted in the document."""

from pydantic import BaseModel


class UserRecord(BaseModel):
    """A stored user, including the password hash.

    Use ``public()`` for anything leaving the service; the hash must never be
    serialized into an API response.
    """

    id: int
    email: str
    password_hash: str
    # Added after the first release; older documents load with False
    is_upgraded: bool = False

    def public(self) -> "User":
        return User(id=self.id, email=self.email, is_upgraded=self.is_upgraded)


class User(BaseModel):
    """Public view of a user."""

    id: int
    email: str
    is_upgraded: bool = False
