"""Revocation ledger - refresh tokens invalidated before their expiry.

Entries live in the ``revoked_tokens`` map of the record store document and
are never removed.
"""

from datetime import UTC, datetime

from chirpy.core.database import Database


class RevocationLedger:
    """Set of revoked token strings with the time each was revoked."""

    def __init__(self, db: Database):
        self.db = db

    def revoke(self, token: str) -> None:
        """Record ``token`` as revoked. Revoking twice keeps the first timestamp."""
        with self.db.transaction() as document:
            document.revoked_tokens.setdefault(token, datetime.now(UTC))

    def is_revoked(self, token: str) -> bool:
        return token in self.db.load().revoked_tokens

    def revoked_at(self, token: str) -> datetime | None:
        return self.db.load().revoked_tokens.get(token)
