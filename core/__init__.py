"""Core text processing, paper assembly and OCR packages."""
