"""
Segmentation of raw question text into structured form fields.

- segment(): heuristic content/answer/analysis split of OCR or pasted text,
  plus 【知识点】 tag extraction
- parse_latex_content(): marker-driven parser for pasted LaTeX fragments

Example usage:
    >>> from core.segmentation import segment
    >>> result = segment("解方程：2x+1=0\\n答案：x=-0.5\\n解析：移项可得")
    >>> result.answer
    '答案：x=-0.5'
"""

from core.segmentation.segmenter import (
    Section,
    SegmentedQuestion,
    extract_tags,
    next_section,
    segment,
)
from core.segmentation.latex_parser import (
    LATEX_EXAMPLE,
    ParsedLatex,
    parse_latex_content,
)

__all__ = [
    'Section',
    'SegmentedQuestion',
    'extract_tags',
    'next_section',
    'segment',
    'LATEX_EXAMPLE',
    'ParsedLatex',
    'parse_latex_content',
]
