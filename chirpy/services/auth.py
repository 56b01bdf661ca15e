"""Authentication service: password hashing and JWT session tokens.

Two token kinds share one signing secret and are told apart by the ``iss``
claim: short-lived access tokens authenticate ordinary requests, long-lived
refresh tokens only mint new access tokens and can be revoked.
"""

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from functools import lru_cache
from typing import Any

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jwt.exceptions import PyJWTError

from chirpy.core import settings
from chirpy.services.revocation import RevocationLedger


class AuthError(Exception):
    """Base authentication error."""

    pass


class InvalidCredentialsError(AuthError):
    """Password does not match the stored hash."""

    pass


class TokenError(AuthError):
    """JWT token error."""

    pass


class TokenExpiredError(TokenError):
    """JWT token has expired."""

    pass


class InvalidTokenError(TokenError):
    """JWT token is malformed, badly signed, or of the wrong kind."""

    pass


class TokenRevokedError(TokenError):
    """Refresh token was revoked before its natural expiry."""

    pass


class TokenKind(str, Enum):
    """Value carried in the ``iss`` claim."""

    ACCESS = "access"
    REFRESH = "refresh"


WRONG_KIND_MESSAGES = {
    TokenKind.ACCESS: "Not an access token",
    TokenKind.REFRESH: "Not a refresh token",
}


@dataclass(frozen=True)
class TokenClaims:
    """Decoded claims of a verified token."""

    kind: TokenKind
    subject: str
    issued_at: datetime
    expires_at: datetime

    @property
    def user_id(self) -> int:
        try:
            return int(self.subject)
        except ValueError as e:
            raise InvalidTokenError(f"Token subject is not a user id: {self.subject!r}") from e


@lru_cache
def _password_hasher() -> PasswordHasher:
    # Argon2id with work factors from settings
    return PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
        hash_len=32,
        salt_len=16,
    )


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    return _password_hasher().hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash using constant-time comparison."""
    try:
        return _password_hasher().verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


class TokenService:
    """Issues, verifies, refreshes and revokes session tokens."""

    def __init__(
        self,
        ledger: RevocationLedger,
        secret: str | None = None,
        algorithm: str | None = None,
        access_lifetime: timedelta | None = None,
        refresh_lifetime: timedelta | None = None,
    ):
        self.ledger = ledger
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        if access_lifetime is None:
            access_lifetime = timedelta(minutes=settings.access_token_expire_minutes)
        if refresh_lifetime is None:
            refresh_lifetime = timedelta(days=settings.refresh_token_expire_days)
        self.lifetimes = {
            TokenKind.ACCESS: access_lifetime,
            TokenKind.REFRESH: refresh_lifetime,
        }

    def issue(self, kind: TokenKind, user_id: int) -> str:
        """Sign a new token of ``kind`` for ``user_id``."""
        now = datetime.now(UTC)
        payload = {
            "iss": kind.value,
            "sub": str(user_id),
            "iat": now,
            "exp": now + self.lifetimes[kind],
            # Tokens minted in the same second still differ
            "jti": secrets.token_hex(16),
        }
        try:
            token = jwt.encode(payload, self.secret, algorithm=self.algorithm)
        except PyJWTError as e:
            raise TokenError(f"Unable to sign token: {e}") from e
        return str(token)

    def create_tokens(self, user_id: int) -> dict[str, str]:
        """Create an access and a refresh token for a login."""
        return {
            "token": self.issue(TokenKind.ACCESS, user_id),
            "refresh_token": self.issue(TokenKind.REFRESH, user_id),
        }

    def parse_and_verify(self, token: str) -> TokenClaims:
        """Verify signature and expiry and return the decoded claims."""
        return self._claims(self._decode(token, verify_exp=True))

    def validate(self, token: str, kind: TokenKind) -> TokenClaims:
        """Verify ``token`` and require it to be of ``kind``."""
        claims = self.parse_and_verify(token)
        if claims.kind is not kind:
            raise InvalidTokenError(WRONG_KIND_MESSAGES[kind])
        return claims

    def validate_access_token(self, token: str) -> TokenClaims:
        return self.validate(token, TokenKind.ACCESS)

    def refresh(self, refresh_token: str) -> str:
        """Mint a new access token from a valid, unrevoked refresh token.

        The refresh token itself is left as is; it is neither rotated nor
        revoked.
        """
        claims = self.validate(refresh_token, TokenKind.REFRESH)
        if self.ledger.is_revoked(refresh_token):
            raise TokenRevokedError("Token has been revoked")
        return self.issue(TokenKind.ACCESS, claims.user_id)

    def revoke(self, refresh_token: str) -> None:
        """Add a refresh token to the revocation ledger.

        The signature must be ours and the kind must be refresh, but expiry is
        not checked: an expired refresh token may still be revoked.
        """
        claims = self._claims(self._decode(refresh_token, verify_exp=False))
        if claims.kind is not TokenKind.REFRESH:
            raise InvalidTokenError(WRONG_KIND_MESSAGES[TokenKind.REFRESH])
        self.ledger.revoke(refresh_token)

    def _decode(self, token: str, verify_exp: bool) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={
                    "require": ["iss", "sub", "iat", "exp"],
                    "verify_exp": verify_exp,
                },
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except PyJWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

    @staticmethod
    def _claims(payload: dict[str, Any]) -> TokenClaims:
        try:
            kind = TokenKind(payload["iss"])
        except ValueError as e:
            raise InvalidTokenError(f"Unknown token issuer: {payload['iss']!r}") from e
        return TokenClaims(
            kind=kind,
            subject=str(payload["sub"]),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
        )
