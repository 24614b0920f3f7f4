"""
Request logging with credential redaction.

Every API request is logged with its method and path. JSON bodies are logged
with provider secrets replaced and image payloads reduced to their length.
"""

import json
import time
import logging
from typing import Any

from fastapi import Request

from config.constants import IMAGE_FIELDS, REDACTED_FIELDS

logger = logging.getLogger("question_bank.requests")


def redact_payload(value: Any) -> Any:
    """
    Copy of a decoded JSON body that is safe to log.

    Nested dicts and lists (e.g. the OCR provider list) are walked.
    """
    if isinstance(value, dict):
        cleaned = {}
        for key, item in value.items():
            if key in REDACTED_FIELDS:
                cleaned[key] = "***" if item else item
            elif key in IMAGE_FIELDS and isinstance(item, str):
                cleaned[key] = f"<image {len(item)} chars>"
            else:
                cleaned[key] = redact_payload(item)
        return cleaned
    if isinstance(value, list):
        return [redact_payload(item) for item in value]
    return value


def describe_body(raw: bytes) -> str:
    if not raw:
        return ""
    try:
        return json.dumps(redact_payload(json.loads(raw)), ensure_ascii=False)[:500]
    except ValueError:
        return f"<{len(raw)} bytes>"


async def log_requests(request: Request, call_next):
    """HTTP middleware: log request, redacted body, status and duration."""
    start = time.time()
    body = ""
    if request.method in ("POST", "PUT", "PATCH"):
        body = describe_body(await request.body())

    logger.info(f"{request.method} {request.url.path} {body}".rstrip())
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.debug(f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.0f}ms)")
    return response
