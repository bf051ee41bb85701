import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from app.middleware.rate_limit import rate_limit_push
from app.services.push import PushService

logger = logging.getLogger(__name__)

router = APIRouter()


class PushRequest(BaseModel):
    token: str = Field(..., min_length=1)
    title: str
    body: str
    data: dict[str, Any] = {}


def get_push_service() -> PushService:
    return PushService()


@router.post("/push")
@rate_limit_push()
async def send_push(
    request: Request,
    payload: PushRequest,
    push: PushService = Depends(get_push_service),
):
    """Relay a notification; the provider's response is returned unchanged."""
    return await push.send(payload.token, payload.title, payload.body, payload.data)
