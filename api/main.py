#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI Web Server - REST API for the Math Question Bank.

This module wires the routers of the question bank:
- Questions (CRUD, tags, rendered preview)
- Papers (manual and automatic assembly)
- Text tools (Markdown + LaTeX rendering, segmentation, LaTeX import)
- OCR acquisition chain
- Maintenance and system info

Usage:
    # Start server
    uvicorn api.main:app --host 0.0.0.0 --port 3001

    # Or through the console script
    question-bank

API Documentation:
    - OpenAPI docs: http://localhost:3001/docs
    - ReDoc: http://localhost:3001/redoc

Configuration:
    Environment variables (or .env):
    - DATABASE_PATH: SQLite file (default: data/question_bank.sqlite)
    - RATE_LIMIT: API rate limit (default: "60/minute")
    - OCR_TIMEOUT / OCR_MAX_RETRIES: OCR HTTP behaviour
    - CLIENT_BUILD_DIR: serve a built front end from this directory
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from config.settings import settings
from config.logging_config import configure_logging, get_logger
from api.request_logging import log_requests
from api.question_routes import router as question_router
from api.paper_routes import router as paper_router
from api.text_routes import router as text_router
from api.ocr_routes import router as ocr_router
from api.admin_routes import router as admin_router

configure_logging(settings.logs_dir)
logger = get_logger(__name__)


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Math Question Bank API",
    description="Question bank with Markdown + LaTeX rendering, OCR intake and paper assembly",
    version="1.0.0"
)

# Rate limiting (configurable via RATE_LIMIT env var)
# Default: 60 requests per minute per IP
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit]
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.middleware("http")(log_requests)

app.include_router(question_router)
app.include_router(paper_router)
app.include_router(text_router)
app.include_router(ocr_router)
app.include_router(admin_router)


@app.get("/health")
async def health():
    return {"status": "ok"}


# Built front end, mounted last so API routes take precedence
if settings.client_build_dir and settings.client_build_dir.exists():
    app.mount("/", StaticFiles(directory=str(settings.client_build_dir), html=True), name="client")
    logger.info(f"Serving front end from {settings.client_build_dir}")


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    import uvicorn

    logger.info("Starting Math Question Bank API Server...")
    logger.info(f"API Documentation: http://localhost:{settings.port}/docs")
    logger.info(f"Database: {settings.database_path}")

    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
