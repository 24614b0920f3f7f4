"""
HTML rendering helpers for question text.
"""

from core.rendering.markdown_renderer import render_markdown

__all__ = ['render_markdown']
