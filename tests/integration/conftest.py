#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pytest fixtures for integration tests.

Provides:
- seeded_client: API client whose repository already holds a small bank
- fake_ocr_factory: Provider factory that never touches the network
"""

import pytest
from unittest.mock import patch

from core.ocr import OcrResult


@pytest.fixture
def seeded_client(client, repository, clock):
    """Client plus three stored questions (ids returned in creation order)."""
    ids = []
    for content, grade, difficulty, tags in [
        ("求 $x$", "初一", 1, ["方程"]),
        ("化简 $\\frac{a}{b}$", "初二", 2, ["分式"]),
        ("画出函数图像", "初二", 3, ["函数", "方程"]),
    ]:
        question = repository.create_question({
            "content": content, "grade": grade, "difficulty": difficulty,
            "custom_tags": tags,
        })
        ids.append(question["id"])
        clock.advance(minutes=1)
    client.question_ids = ids
    return client


class StubProvider:
    """Returns a fixed recognition result."""

    def __init__(self, name: str, text: str):
        self.name = name
        self.text = text

    def recognize(self, image_b64: str) -> OcrResult:
        return OcrResult(success=True, text=self.text, confidence=0.8)


@pytest.fixture
def fake_ocr_factory(ocr_text):
    """Patch the route's provider factory with an offline stub."""
    factory = lambda config: StubProvider(config.name, ocr_text)
    with patch("api.ocr_routes.settings_provider_factory", factory):
        yield factory
