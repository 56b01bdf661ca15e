"""User API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from chirpy.api.auth import get_current_user_id, get_user_service
from chirpy.schemas.user import UserCreate, UserResponse, UserUpdate
from chirpy.services.user import EmailInUseError, UserNotFoundError, UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Sign up. Returns 409 Conflict if the email is already registered."""
    try:
        user = user_service.create(body.email, body.password)
    except EmailInUseError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="That email is already in use",
        ) from e
    logger.info("User created", extra={"user_id": user.id})
    return UserResponse.model_validate(user)


@router.put("", response_model=UserResponse)
def update_user(
    body: UserUpdate,
    user_id: int = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update the authenticated user's email and/or password."""
    try:
        user = user_service.update(user_id, email=body.email, password=body.password)
    except UserNotFoundError as e:
        # Valid token for a user that no longer exists in this store
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        ) from e
    except EmailInUseError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="That email is already in use",
        ) from e
    logger.info("User updated", extra={"user_id": user.id})
    return UserResponse.model_validate(user)
