"""Chirp API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from chirpy.api.auth import get_current_user_id
from chirpy.core import Database, get_db, settings
from chirpy.models.chirp import Chirp
from chirpy.schemas.chirp import ChirpCreate, ChirpResponse
from chirpy.services.chirp import ChirpService
from chirpy.services.moderation import clean_chirp_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chirps", tags=["chirps"])


def get_chirp_service(db: Database = Depends(get_db)) -> ChirpService:
    """Dependency to get chirp service."""
    return ChirpService(db)


def sort_chirps(chirps: list[Chirp], order: str | None) -> list[Chirp]:
    """Sort by id; ``desc`` reverses, anything else is ascending."""
    return sorted(chirps, key=lambda chirp: chirp.id, reverse=order == "desc")


@router.post("", response_model=ChirpResponse, status_code=status.HTTP_201_CREATED)
def create_chirp(
    body: ChirpCreate,
    author_id: int = Depends(get_current_user_id),
    chirp_service: ChirpService = Depends(get_chirp_service),
) -> ChirpResponse:
    """Post a chirp as the authenticated user. Profane words are masked."""
    if len(body.body) > settings.chirp_max_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Chirp is too long",
        )
    chirp = chirp_service.create(clean_chirp_body(body.body), author_id)
    return ChirpResponse.model_validate(chirp)


@router.get("", response_model=list[ChirpResponse])
def list_chirps(
    author_id: str | None = Query(default=None),
    sort: str | None = Query(default=None),
    chirp_service: ChirpService = Depends(get_chirp_service),
) -> list[ChirpResponse]:
    """List chirps, optionally for one author, sorted by id (``asc`` or ``desc``).

    An ``author_id`` that is not an integer is ignored.
    """
    try:
        chirps = (
            chirp_service.list_by_author(int(author_id))
            if author_id
            else chirp_service.list()
        )
    except ValueError:
        chirps = chirp_service.list()
    return [ChirpResponse.model_validate(chirp) for chirp in sort_chirps(chirps, sort)]


@router.get("/{chirp_id}", response_model=ChirpResponse)
def get_chirp(
    chirp_id: int,
    chirp_service: ChirpService = Depends(get_chirp_service),
) -> ChirpResponse:
    """Get a chirp by id."""
    chirp = chirp_service.get(chirp_id)
    if chirp is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Chirp {chirp_id} not found",
        )
    return ChirpResponse.model_validate(chirp)


@router.delete("/{chirp_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_chirp(
    chirp_id: int,
    user_id: int = Depends(get_current_user_id),
    chirp_service: ChirpService = Depends(get_chirp_service),
) -> None:
    """Delete a chirp. Only its author may delete it."""
    chirp = chirp_service.get(chirp_id)
    if chirp is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Chirp {chirp_id} not found",
        )
    if chirp.author_id != user_id:
        logger.warning(
            f"Delete refused, chirp belongs to user {chirp.author_id}",
            extra={"user_id": user_id, "chirp_id": chirp_id},
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the author may delete a chirp",
        )
    if not chirp_service.delete(chirp_id):
        # Deleted by a concurrent request between the lookup and now
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Chirp {chirp_id} not found",
        )
