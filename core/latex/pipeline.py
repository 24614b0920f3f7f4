"""
Display Pipeline - stored/recognized question text -> display HTML.

Fixed order:
    normalize -> block formulas ($$...$$) -> inline formulas ($...$)
    -> LaTeX text commands -> Markdown

Block formulas are rendered before inline ones so the inline pattern never
pairs up the dollars of a display formula. Rendered formulas wait behind
opaque placeholders while the text passes run and are put back at the end,
so Markdown emphasis never rewrites typeset output.

The pipeline is a pure function of its input: nothing is cached or persisted
and the result is recomputed on every display.
"""

import regex
from typing import List

from core.latex.normalizer import normalize
from core.latex.spans import BLOCK_MATH, INLINE_MATH
from core.latex.math_renderer import render_formula
from core.latex.text_commands import render_latex_text
from core.rendering.markdown_renderer import render_markdown

# NUL never survives normalize, so input cannot forge a placeholder
_PLACEHOLDER = '\x00MATH{}\x00'
_PLACEHOLDER_PATTERN = regex.compile('\x00MATH(\\d+)\x00')


def render_math_spans(text: str, rendered: List[str]) -> str:
    """
    Replace every canonical math span with a placeholder.

    Args:
        text: Normalized text
        rendered: Receives the typeset HTML; placeholder N maps to rendered[N]

    Returns:
        Text with placeholders where the formulas were
    """

    def stash(html: str) -> str:
        rendered.append(html)
        return _PLACEHOLDER.format(len(rendered) - 1)

    text = BLOCK_MATH.sub(lambda m: stash(render_formula(m.group(1), True)), text)
    text = INLINE_MATH.sub(lambda m: stash(render_formula(m.group(1), False)), text)
    return text


def _restore(text: str, rendered: List[str]) -> str:
    def repl(match) -> str:
        index = int(match.group(1))
        return rendered[index] if index < len(rendered) else match.group(0)

    return _PLACEHOLDER_PATTERN.sub(repl, text)


def render_markdown_with_latex(text) -> str:
    """
    Render question text (Markdown + LaTeX) to HTML.

    Args:
        text: Raw or stored text; None/non-str gives ""

    Returns:
        HTML safe to embed in any display surface. Malformed formulas show
        as error spans; the call itself never raises.
    """
    if not isinstance(text, str) or not text:
        return ''

    rendered: List[str] = []
    processed = normalize(text)
    processed = render_math_spans(processed, rendered)
    processed = render_latex_text(processed)
    processed = render_markdown(processed)
    return _restore(processed, rendered)
