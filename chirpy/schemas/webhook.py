"""Pydantic schemas for payment provider webhooks."""

from pydantic import BaseModel

USER_UPGRADED_EVENT = "user.upgraded"


class WebhookData(BaseModel):
    user_id: int


class WebhookEvent(BaseModel):
    """Event posted by Polka when a user pays."""

    event: str
    data: WebhookData
