"""Chirp service - create, read and delete chirps."""

from chirpy.core.database import Database
from chirpy.models.chirp import Chirp


class ChirpService:
    """Post repository over the record store.

    Body length and profanity are the caller's concern; bodies are stored
    exactly as given. Ownership checks before ``delete`` are the caller's
    concern too.
    """

    def __init__(self, db: Database):
        self.db = db

    def create(self, body: str, author_id: int) -> Chirp:
        with self.db.transaction() as document:
            chirp = Chirp(id=document.allocate_chirp_id(), body=body, author_id=author_id)
            document.chirps[chirp.id] = chirp
        return chirp

    def get(self, chirp_id: int) -> Chirp | None:
        """Get a chirp by id, or None when there is no such chirp."""
        return self.db.load().chirps.get(chirp_id)

    def list(self) -> list[Chirp]:
        """All chirps, in no particular order."""
        return list(self.db.load().chirps.values())

    def list_by_author(self, author_id: int) -> "list[Chirp]":
        return [chirp for chirp in self.list() if chirp.author_id == author_id]

    def delete(self, chirp_id: int) -> bool:
        """Delete a chirp. Returns False when the id does not exist."""
        with self.db.transaction() as document:
            if document.chirps.pop(chirp_id, None) is None:
                return False
        return True
