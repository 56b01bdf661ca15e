# Chirpy Services
from chirpy.services.auth import TokenKind, TokenService
from chirpy.services.chirp import ChirpService
from chirpy.services.moderation import clean_chirp_body
from chirpy.services.revocation import RevocationLedger
from chirpy.services.user import UserService

__all__ = [
    "ChirpService",
    "RevocationLedger",
    "TokenKind",
    "TokenService",
    "UserService",
    "clean_chirp_body",
]
