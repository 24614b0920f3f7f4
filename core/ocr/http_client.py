#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HTTP Endpoint Provider - generic JSON OCR endpoint

Implements the OcrProvider protocol for self-hosted or third-party services
that accept a JSON image payload and answer with recognized text/LaTeX.
"""

import time
import logging
from typing import Dict, Optional

import httpx

from config.constants import OCR_MAX_RETRIES, OCR_TIMEOUT_SECONDS
from .base import OcrError, OcrConnectionError, OcrQuotaError, OcrInvalidInputError, OcrResult
from .models import ProviderConfig

logger = logging.getLogger(__name__)


class HttpEndpointProvider:
    """
    OCR provider that POSTs the image to a configured endpoint.

    Request:
        POST <endpoint>
        Authorization: Bearer <api_key>
        {"image": "data:image/jpeg;base64,...", "format": "latex"}

    Response (JSON):
        {"text": "...", "latex": "...", "confidence": 0.93}

    Usage:
        provider = HttpEndpointProvider(config)
        result = provider.recognize(image_b64)
    """

    def __init__(
        self,
        config: ProviderConfig,
        timeout: int = OCR_TIMEOUT_SECONDS,
        max_retries: int = OCR_MAX_RETRIES,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize the provider.

        Args:
            config: Provider descriptor; ``endpoint`` is required
            timeout: Request timeout in seconds
            max_retries: Attempts on connection failure
            transport: Optional httpx transport (tests inject a MockTransport)

        Raises:
            OcrError: If no endpoint is configured
        """
        if not config.endpoint:
            raise OcrError(f"{config.name}: endpoint not configured")

        self.config = config
        self.name = config.name
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def recognize(self, image_b64: str) -> OcrResult:
        """
        Recognize one image.

        Raises:
            OcrQuotaError: If the endpoint rate-limits the request
            OcrConnectionError: If the endpoint is unreachable
            OcrInvalidInputError: If the image is rejected
            OcrError: For other API errors
        """
        payload = {
            "image": f"data:image/jpeg;base64,{image_b64}",
            "format": "latex"
        }

        # Retry logic with exponential backoff
        for attempt in range(self.max_retries):
            try:
                with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                    response = client.post(
                        self.config.endpoint,
                        json=payload,
                        headers=self._headers()
                    )

                if response.status_code == 200:
                    return self._parse_response(response.json())

                elif response.status_code == 429:
                    raise OcrQuotaError(f"{self.name}: rate limit exceeded")

                elif response.status_code in [400, 422]:
                    raise OcrInvalidInputError(
                        f"{self.name}: {self._error_message(response, 'invalid image')}"
                    )

                elif response.status_code in [401, 403]:
                    raise OcrError(f"{self.name}: authentication failed, check the API key")

                else:
                    raise OcrError(
                        f"{self.name}: {self._error_message(response, f'HTTP {response.status_code}')}"
                    )

            except httpx.TransportError as e:
                if attempt < self.max_retries - 1:
                    wait_time = 2 ** attempt
                    logger.warning(f"{self.name} connection failed, retrying in {wait_time}s...")
                    time.sleep(wait_time)
                else:
                    raise OcrConnectionError(
                        f"Failed to connect to {self.name} after {self.max_retries} attempts"
                    ) from e

            except ValueError as e:
                # response.json() on a non-JSON body
                raise OcrError(f"{self.name}: response is not JSON") from e

        raise OcrError("Max retries exceeded")

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        try:
            return response.json().get("error") or default
        except ValueError:
            return response.text or default

    def _parse_response(self, data: Dict) -> OcrResult:
        text = data.get("text") or ""
        latex = data.get("latex") or ""
        return OcrResult(
            success=True,
            text=text or latex,
            latex=latex,
            confidence=float(data.get("confidence") or 0.0),
            api_used=self.name
        )
