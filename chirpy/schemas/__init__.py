# Chirpy API schemas
from chirpy.schemas.auth import LoginRequest, LoginResponse, RefreshResponse
from chirpy.schemas.chirp import ChirpCreate, ChirpResponse
from chirpy.schemas.user import UserCreate, UserResponse, UserUpdate
from chirpy.schemas.webhook import WebhookEvent

__all__ = [
    "ChirpCreate",
    "ChirpResponse",
    "LoginRequest",
    "LoginResponse",
    "RefreshResponse",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
    "WebhookEvent",
]
