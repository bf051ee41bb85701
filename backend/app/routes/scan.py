import logging
from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import Field

from app.config import settings
from app.exceptions import BadInputError, RecordNotFoundError
from app.middleware.rate_limit import rate_limit_scan
from app.models import CamelModel
from app.services.extraction import ExtractionConfig, ExtractionResult, FieldExtractor
from app.services.ocr import OCRService
from app.services.records import RecordStore
from app.utils import names_match, parse_base64_image

logger = logging.getLogger(__name__)

router = APIRouter()


class ScanRequest(CamelModel):
    base64_image: str | None = Field(default=None, alias="base64Image")


class IdDetails(CamelModel):
    belongs_to_jurisdiction: bool
    identifier: str
    first_name: str
    middle_name: str
    last_name: str
    status_message: str

    @classmethod
    def from_result(cls, result: ExtractionResult) -> "IdDetails":
        return cls(
            belongs_to_jurisdiction=result.belongs_to_jurisdiction,
            identifier=result.identifier,
            first_name=result.first_name,
            middle_name=result.middle_name,
            last_name=result.last_name,
            status_message=result.status_message,
        )


class ScanResponse(CamelModel):
    id_details: IdDetails
    member: dict[str, Any]
    name_matches: bool | None = None
    message: str


@lru_cache
def get_field_extractor() -> FieldExtractor:
    return FieldExtractor(ExtractionConfig(jurisdiction=settings.jurisdiction_keyword))


def get_ocr_service() -> OCRService:
    return OCRService()


def get_record_store() -> RecordStore:
    return RecordStore()


@router.post("/scan", response_model=ScanResponse)
@rate_limit_scan()
async def scan_document(
    request: Request,
    payload: ScanRequest,
    extractor: FieldExtractor = Depends(get_field_extractor),
    ocr: OCRService = Depends(get_ocr_service),
    records: RecordStore = Depends(get_record_store),
):
    """OCR an ID photo, extract its fields and look the holder up."""
    image, mime_type = parse_base64_image(payload.base64_image)
    logger.info(f"Scan request received ({len(image)} base64 chars)")

    text = await ocr.extract_text(image, mime_type)
    result = extractor.extract(text)
    id_details = IdDetails.from_result(result).model_dump(by_alias=True)

    if not result.belongs_to_jurisdiction:
        raise BadInputError(result.status_message, extra={"idDetails": id_details})

    if not result.has_identifier:
        raise RecordNotFoundError(result.status_message, extra={"idDetails": id_details})

    logger.info(f"Querying record store for identifier {result.identifier}")
    member = await records.find_by_identifier(result.identifier)
    if member is None:
        raise RecordNotFoundError("PWD record not found.", extra={"idDetails": id_details})

    matches = names_match(
        result.first_name,
        result.last_name,
        member.get("FirstName"),
        member.get("LastName"),
    )
    logger.info(
        f"Match found: {member.get('FirstName', '')} {member.get('LastName', '')}",
        extra={"identifier": result.identifier, "name_matches": matches},
    )

    return ScanResponse(
        id_details=IdDetails.from_result(result),
        member=member,
        name_matches=matches,
        message="Record found and verified.",
    )
