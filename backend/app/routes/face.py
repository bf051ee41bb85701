import logging

from fastapi import APIRouter, Depends, Request
from pydantic import Field

from app.middleware.rate_limit import rate_limit_face
from app.models import CamelModel
from app.services.face import FaceService
from app.utils import parse_base64_image

logger = logging.getLogger(__name__)

router = APIRouter()


class FaceVerifyRequest(CamelModel):
    selfie_base64: str | None = Field(default=None, alias="selfieBase64")
    profile_base64: str | None = Field(default=None, alias="profileBase64")


class FaceVerifyResponse(CamelModel):
    confidence: float | None = None
    thresholds: dict[str, float] = {}


def get_face_service() -> FaceService:
    return FaceService()


@router.post("/face-verify", response_model=FaceVerifyResponse)
@rate_limit_face()
async def face_verify(
    request: Request,
    payload: FaceVerifyRequest,
    faces: FaceService = Depends(get_face_service),
):
    """Compare a live selfie with the member's profile photo."""
    selfie, _ = parse_base64_image(payload.selfie_base64, "selfie image")
    profile, _ = parse_base64_image(payload.profile_base64, "profile image")

    comparison = await faces.compare(selfie, profile)
    logger.info(f"Face comparison confidence: {comparison.confidence}")

    return FaceVerifyResponse(
        confidence=comparison.confidence,
        thresholds=comparison.thresholds,
    )
