"""
OCR (Optical Character Recognition) Acquisition

Supplies raw recognized text for the segmenter:
- Provider protocol, result record and error hierarchy
- Provider descriptors (priority, credentials, monthly quota)
- Generic HTTP endpoint provider
- Priority-ordered fallback chain with quota bookkeeping

Example usage:

    from core.ocr import OcrChain, ProviderConfig

    chain = OcrChain([
        ProviderConfig(id="main", name="School OCR", type="custom",
                       endpoint="https://ocr.example.org/recognize",
                       api_key="...", priority=1, monthly_quota=1000),
    ])
    result = chain.recognize(image_b64)
    if result.success:
        logger.info(f"Recognized by {result.api_used}")
"""

from .base import (
    OcrProvider,
    OcrResult,
    OcrError,
    OcrConnectionError,
    OcrQuotaError,
    OcrInvalidInputError
)
from .models import ProviderConfig, strip_data_url
from .http_client import HttpEndpointProvider
from .chain import OcrChain, default_provider_factory

__all__ = [
    # Base interface and exceptions
    'OcrProvider',
    'OcrResult',
    'OcrError',
    'OcrConnectionError',
    'OcrQuotaError',
    'OcrInvalidInputError',

    # Configuration
    'ProviderConfig',
    'strip_data_url',

    # Providers
    'HttpEndpointProvider',

    # Chain
    'OcrChain',
    'default_provider_factory',
]
