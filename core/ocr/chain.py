#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
OCR Acquisition Chain - priority-ordered fallback across providers

Strategy:
1. Take enabled providers, lowest priority number first
2. Skip a provider whose monthly quota is used up
3. Call it; the first success with non-blank text wins
4. Count the successful call against that provider's monthly usage
5. Any provider error is logged and the next provider is tried

The chain owns no credentials or counters of its own: the caller passes the
provider list in and persists the updated ``providers`` afterwards.
"""

import logging
from typing import Callable, Dict, List, Optional

from .base import OcrError, OcrProvider, OcrResult
from .http_client import HttpEndpointProvider
from .models import ProviderConfig, strip_data_url

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[ProviderConfig], Optional[OcrProvider]]


def default_provider_factory(config: ProviderConfig) -> Optional[OcrProvider]:
    """Build the provider for a descriptor; None for unsupported kinds."""
    if config.type == "custom":
        return HttpEndpointProvider(config)
    return None


class OcrChain:
    """
    Fallback chain over configured OCR providers.

    Usage:
        chain = OcrChain(configs)
        result = chain.recognize(image_b64)
        save(chain.providers)  # usage counters were updated

    Args:
        providers: Provider descriptors (copied; the originals are untouched)
        provider_factory: Builds a provider from a descriptor
    """

    def __init__(
        self,
        providers: List[ProviderConfig],
        provider_factory: ProviderFactory = default_provider_factory
    ):
        self.providers = [p.model_copy() for p in providers]
        self.provider_factory = provider_factory
        self.attempts: List[OcrResult] = []

    def ordered(self) -> List[ProviderConfig]:
        """Enabled providers in call order."""
        return sorted(
            (p for p in self.providers if p.enabled),
            key=lambda p: p.priority
        )

    def _call(self, config: ProviderConfig, image_b64: str) -> OcrResult:
        if config.quota_exhausted():
            return OcrResult.failure(f"{config.name}: monthly quota used up", config.name)

        try:
            provider = self.provider_factory(config)
        except OcrError as e:
            return OcrResult.failure(str(e), config.name)
        if provider is None:
            return OcrResult.failure(f"{config.name}: provider type '{config.type}' is not supported", config.name)

        try:
            result = provider.recognize(image_b64)
        except OcrError as e:
            return OcrResult.failure(str(e), config.name)
        except Exception as e:
            logger.error(f"{config.name} raised unexpectedly: {e}")
            return OcrResult.failure(f"{config.name}: {e}", config.name)

        if result.api_used is None:
            result.api_used = config.name
        return result

    def recognize(self, image_b64: str) -> OcrResult:
        """
        Run the chain on one image.

        Args:
            image_b64: Base64 image, with or without a data-URL prefix

        Returns:
            The winning OcrResult, or a failure listing what went wrong.
            Never raises.
        """
        self.attempts = []
        candidates = self.ordered()
        if not candidates:
            return OcrResult.failure("No OCR provider configured")

        image = strip_data_url(image_b64)
        if not image:
            return OcrResult.failure("Empty image payload")

        for config in candidates:
            logger.info(f"Trying OCR provider {config.name}...")
            result = self._call(config, image)
            self.attempts.append(result)

            if result.success and result.text.strip():
                config.used_this_month += 1
                logger.info(f"{config.name} recognition succeeded")
                return result

            logger.info(f"{config.name} failed or returned nothing: {result.error}")

        errors = "; ".join(a.error for a in self.attempts if a.error)
        return OcrResult.failure(f"All OCR providers failed: {errors}" if errors else "All OCR providers failed")

    def usage(self) -> Dict[str, int]:
        return {p.id: p.used_this_month for p in self.providers}
