"""
LaTeX display pipeline for question text.

Stages (each usable on its own):
    normalize                   - canonical $...$ / $$...$$ delimiters
    render_formula              - one formula -> MathML, error span on failure
    render_latex_text           - \\textbf, \\textit, \\underline, \\item -> HTML
    render_markdown_with_latex  - the full pipeline, ending in Markdown

Example usage:
    >>> from core.latex import render_markdown_with_latex
    >>> html = render_markdown_with_latex(r"**已知** \\(x^2 = 4\\)，求 $x$")
"""

from core.latex.normalizer import normalize, NORMALIZATION_STEPS
from core.latex.math_renderer import (
    RenderOutcome,
    render_formula,
    typeset,
)
from core.latex.text_commands import render_latex_text
from core.latex.pipeline import render_markdown_with_latex

__all__ = [
    'normalize',
    'NORMALIZATION_STEPS',
    'RenderOutcome',
    'render_formula',
    'typeset',
    'render_latex_text',
    'render_markdown_with_latex',
]
