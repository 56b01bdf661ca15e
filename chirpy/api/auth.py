"""Authentication API endpoints: login, token refresh and revocation."""

import logging
import threading
import time
from collections import defaultdict

from fastapi import APIRouter, Depends, HTTPException, Request, status

from chirpy.core import Database, get_db
from chirpy.schemas.auth import LoginRequest, LoginResponse, RefreshResponse
from chirpy.services.auth import (
    AuthError,
    InvalidCredentialsError,
    TokenExpiredError,
    TokenRevokedError,
    TokenService,
)
from chirpy.services.revocation import RevocationLedger
from chirpy.services.user import UserNotFoundError, UserService

logger = logging.getLogger(__name__)

# Rate limiting for failed login attempts
_login_attempts: dict[str, list[float]] = defaultdict(list)
_LOGIN_WINDOW = 60  # 1-minute window
_LOGIN_MAX_ATTEMPTS = 5  # Max failed attempts per window
# Guards _login_attempts across threadpool workers
_login_attempts_lock = threading.Lock()

# Single answer for unknown email and wrong password
INVALID_CREDENTIALS_DETAIL = "Incorrect email or password"


def _check_login_rate_limit(client_ip: str) -> None:
    """Check if a client IP has exceeded the login attempt rate limit."""
    now = time.monotonic()
    with _login_attempts_lock:
        attempts = [t for t in _login_attempts[client_ip] if now - t < _LOGIN_WINDOW]
        _login_attempts[client_ip] = attempts
    if len(attempts) >= _LOGIN_MAX_ATTEMPTS:
        logger.warning("Login rate limit exceeded for %s", client_ip)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Please try again later.",
        )


def _record_login_attempt(client_ip: str) -> None:
    """Record a failed login attempt for rate limiting."""
    with _login_attempts_lock:
        _login_attempts[client_ip].append(time.monotonic())


def extract_bearer_token(request: Request) -> str | None:
    """Return the token from ``Authorization: Bearer <token>``, if present."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:].strip() or None


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_bearer_token(request: Request) -> str:
    """Dependency: the raw bearer token, or 401."""
    token = extract_bearer_token(request)
    if token is None:
        raise unauthorized("Missing or invalid authorization header")
    return token


router = APIRouter(tags=["auth"])


def get_token_service(db: Database = Depends(get_db)) -> TokenService:
    """Dependency to get token service."""
    return TokenService(RevocationLedger(db))


def get_user_service(db: Database = Depends(get_db)) -> UserService:
    """Dependency to get user service."""
    return UserService(db)


def get_current_user_id(
    request: Request,
    token: str = Depends(require_bearer_token),
    token_service: TokenService = Depends(get_token_service),
) -> int:
    """Dependency to get the authenticated user id from an access token."""
    try:
        claims = token_service.validate_access_token(token)
        return claims.user_id
    except TokenExpiredError as e:
        raise unauthorized("Token has expired") from e
    except AuthError as e:
        logger.warning(
            f"Rejected access token: {e}",
            extra={"method": request.method, "path": request.url.path},
        )
        raise unauthorized(str(e)) from e


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    http_request: Request,
    user_service: UserService = Depends(get_user_service),
    token_service: TokenService = Depends(get_token_service),
) -> LoginResponse:
    """Authenticate and get an access and a refresh token.

    Rate limited to 5 failed attempts per minute per IP.
    """
    client_ip = http_request.client.host if http_request.client else "unknown"
    _check_login_rate_limit(client_ip)

    try:
        user = user_service.validate_credentials(body.email, body.password)
    except (UserNotFoundError, InvalidCredentialsError) as e:
        _record_login_attempt(client_ip)
        logger.info(f"Failed login for {body.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS_DETAIL,
        ) from e

    tokens = token_service.create_tokens(user.id)
    logger.info("User logged in", extra={"user_id": user.id})
    return LoginResponse(**user.model_dump(), **tokens)


@router.post("/refresh", response_model=RefreshResponse)
def refresh_token(
    token: str = Depends(require_bearer_token),
    token_service: TokenService = Depends(get_token_service),
) -> RefreshResponse:
    """Exchange a refresh token for a new access token.

    The refresh token stays valid; it is not rotated.
    """
    try:
        return RefreshResponse(token=token_service.refresh(token))
    except TokenExpiredError as e:
        raise unauthorized("Refresh token has expired") from e
    except TokenRevokedError as e:
        logger.warning("Revoked refresh token presented")
        raise unauthorized(str(e)) from e
    except AuthError as e:
        raise unauthorized(str(e)) from e


@router.post("/revoke", status_code=status.HTTP_204_NO_CONTENT)
def revoke_token(
    token: str = Depends(require_bearer_token),
    token_service: TokenService = Depends(get_token_service),
) -> None:
    """Revoke a refresh token. Expired refresh tokens are accepted too."""
    try:
        token_service.revoke(token)
    except AuthError as e:
        raise unauthorized(str(e)) from e
    logger.info("Refresh token revoked")
