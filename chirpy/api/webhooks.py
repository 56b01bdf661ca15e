"""Payment provider webhooks."""

import hmac
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from chirpy.api.auth import get_user_service
from chirpy.core import settings
from chirpy.schemas.webhook import USER_UPGRADED_EVENT, WebhookEvent
from chirpy.services.user import UserNotFoundError, UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/polka", tags=["webhooks"])


def verify_polka_api_key(request: Request) -> None:
    """Dependency: require ``Authorization: ApiKey <key>`` when a key is configured."""
    expected = settings.polka_api_key
    if not expected:
        return
    auth_header = request.headers.get("Authorization", "")
    provided = auth_header[len("ApiKey ") :].strip() if auth_header.startswith("ApiKey ") else ""
    if not provided or not hmac.compare_digest(provided.encode(), expected.encode()):
        logger.warning("Webhook call with missing or invalid API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )


@router.post(
    "/webhooks",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(verify_polka_api_key)],
)
def polka_webhook(
    event: WebhookEvent,
    user_service: UserService = Depends(get_user_service),
) -> None:
    """Handle a Polka event. Only ``user.upgraded`` does anything."""
    if event.event != USER_UPGRADED_EVENT:
        logger.debug(f"Ignoring webhook event: {event.event}")
        return
    try:
        user_service.upgrade(event.data.user_id)
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        ) from e
    logger.info("User upgraded", extra={"user_id": event.data.user_id})
