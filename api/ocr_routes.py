"""
OCR API Routes

Runs the acquisition chain over the providers sent by the client and
segments the recognized text into question fields.
"""

import logging
from typing import Optional, List, Dict, Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from config.settings import settings
from core.ocr import OcrChain, OcrProvider, ProviderConfig, HttpEndpointProvider, strip_data_url
from core.segmentation import segment

logger = logging.getLogger(__name__)


class OcrRequest(BaseModel):
    """Image plus the caller's provider list (credentials and counters)"""
    image_base64: str = Field(..., min_length=1, description="Base64 image, data-URL prefix allowed")
    providers: List[ProviderConfig] = Field(default_factory=list)


class OcrResponse(BaseModel):
    success: bool
    text: str = ""
    latex: str = ""
    confidence: float = 0.0
    error: Optional[str] = None
    api_used: Optional[str] = None
    question: Optional[Dict[str, Any]] = Field(default=None, description="Segmented fields on success")
    usage: Dict[str, int] = Field(default_factory=dict, description="Updated used_this_month per provider id")
    attempts: List[Dict[str, Any]] = Field(default_factory=list)


def settings_provider_factory(config: ProviderConfig) -> Optional[OcrProvider]:
    """Provider factory honouring the configured timeout and retry count."""
    if config.type == "custom":
        return HttpEndpointProvider(
            config,
            timeout=settings.ocr_timeout,
            max_retries=settings.ocr_max_retries
        )
    return None


router = APIRouter(prefix="/api/ocr", tags=["OCR"])


@router.post("/recognize", response_model=OcrResponse)
def recognize(payload: OcrRequest):
    """
    Recognize an uploaded image.

    Providers are tried by priority; the response carries the winning
    result, the segmented question and the usage counters to persist.
    """
    image = strip_data_url(payload.image_base64)
    size_mb = len(image) * 3 / 4 / (1024 * 1024)
    if size_mb > settings.max_ocr_image_size_mb:
        raise HTTPException(
            status_code=413,
            detail=f"Image too large ({size_mb:.1f}MB > {settings.max_ocr_image_size_mb}MB)"
        )

    chain = OcrChain(payload.providers, provider_factory=settings_provider_factory)
    result = chain.recognize(image)

    response = OcrResponse(
        **result.to_dict(),
        usage=chain.usage(),
        attempts=[attempt.to_dict() for attempt in chain.attempts],
    )
    if result.success:
        response.question = segment(result.text).to_dict()
    else:
        logger.warning(f"OCR failed: {result.error}")
    return response
