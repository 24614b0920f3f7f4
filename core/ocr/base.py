"""
OCR Provider Base Interface

Defines the provider protocol, the result record and the OCR error hierarchy.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Optional, Protocol


@dataclass
class OcrResult:
    """
    Outcome of one recognition attempt.

    Attributes:
        success: True when the provider returned a usable answer
        text: Recognized text (may contain LaTeX)
        latex: LaTeX-only rendition, when the provider offers one
        confidence: Provider confidence (0.0-1.0)
        error: Failure description when success is False
        api_used: Display name of the provider that produced this result
    """
    success: bool
    text: str = ""
    latex: str = ""
    confidence: float = 0.0
    error: Optional[str] = None
    api_used: Optional[str] = None

    @classmethod
    def failure(cls, error: str, api_used: Optional[str] = None) -> "OcrResult":
        return cls(success=False, error=error, api_used=api_used)

    def to_dict(self) -> Dict:
        return asdict(self)


class OcrProvider(Protocol):
    """
    Recognition backend used by the acquisition chain.

    Implementations receive a bare base64 image (no data-URL prefix) and
    either return an OcrResult or raise an OcrError.
    """

    name: str

    def recognize(self, image_b64: str) -> OcrResult:
        ...


class OcrError(Exception):
    """Base exception for OCR-related errors"""
    pass


class OcrConnectionError(OcrError):
    """OCR service connection error"""
    pass


class OcrQuotaError(OcrError):
    """OCR quota/rate limit exceeded"""
    pass


class OcrInvalidInputError(OcrError):
    """Invalid input image"""
    pass
