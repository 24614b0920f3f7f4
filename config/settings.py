#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings

from .constants import (
    API_RATE_LIMIT,
    AUTO_PAPER_MAX_COUNT,
    DEFAULT_TEACHER,
    MAX_IMAGE_SIZE_MB,
    OCR_MAX_RETRIES,
    OCR_TIMEOUT_SECONDS,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # ========== Storage ==========
    database_path: Path = BASE_DIR / "data" / "question_bank.sqlite"

    # ========== Papers ==========
    default_teacher: str = DEFAULT_TEACHER
    auto_paper_max: int = AUTO_PAPER_MAX_COUNT

    # ========== OCR ==========
    ocr_timeout: int = OCR_TIMEOUT_SECONDS
    ocr_max_retries: int = OCR_MAX_RETRIES
    max_ocr_image_size_mb: int = MAX_IMAGE_SIZE_MB

    # ========== Server ==========
    host: str = "0.0.0.0"
    port: int = 3001
    rate_limit: str = API_RATE_LIMIT
    allowed_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Serve a built front end from this directory when set
    client_build_dir: Optional[Path] = None

    # ========== Directories ==========
    data_dir: Path = BASE_DIR / "data"
    logs_dir: Path = BASE_DIR / "logs"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env that aren't defined in model

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Create directories
        for dir_path in [
            self.data_dir,
            self.logs_dir,
            self.database_path.parent,
        ]:
            dir_path.mkdir(exist_ok=True, parents=True)

    def summary(self) -> dict:
        """Configuration summary for the system info endpoint"""
        return {
            "database_path": str(self.database_path),
            "default_teacher": self.default_teacher,
            "auto_paper_max": self.auto_paper_max,
            "ocr_timeout": self.ocr_timeout,
            "ocr_max_retries": self.ocr_max_retries,
            "rate_limit": self.rate_limit,
        }


# Global settings instance
settings = Settings()
