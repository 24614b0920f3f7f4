"""
Math Renderer - typesets single LaTeX formulas to MathML.

The renderer never raises. Every call produces a ``RenderOutcome``; the public
``render_formula`` unwraps a failed outcome into a red error span that shows
the original formula source, so one bad formula never breaks a page.
"""

import re
import html
import logging
from dataclasses import dataclass
from typing import Optional

from latex2mathml.converter import convert as latex2mathml_convert

from config.constants import MATH_ERROR_COLOR, MATH_MACROS

logger = logging.getLogger(__name__)

_TRAILING_BACKSLASH = re.compile(r'\\$')


@dataclass
class RenderOutcome:
    """
    Result of typesetting one formula.

    Attributes:
        source: Formula as given by the caller (trimmed)
        ok: True when ``html`` holds typeset output
        html: Rendered markup (empty on failure)
        error: Failure description when ok is False
    """
    source: str
    ok: bool
    html: str = ""
    error: Optional[str] = None


def expand_macros(formula: str) -> str:
    r"""Expand the fixed blackboard-bold shorthands (\RR, \NN, ...)."""
    for name, expansion in MATH_MACROS.items():
        formula = re.sub(
            re.escape(name) + r'(?![A-Za-z])',
            lambda _m, e=expansion: e,
            formula
        )
    return formula


def check_structure(formula: str) -> Optional[str]:
    """
    Cheap structural validation run before typesetting.

    Returns:
        Error description, or None when braces are balanced
    """
    depth = 0
    i = 0
    while i < len(formula):
        ch = formula[i]
        if ch == '\\':
            i += 2  # skip escaped character (\{, \}, \\)
            continue
        if ch == '{':
            depth += 1
        elif ch == '}':
            depth -= 1
            if depth < 0:
                return "unexpected '}'"
        i += 1
    if depth > 0:
        return "missing '}'"
    return None


def typeset(formula: str, display_mode: bool = False) -> RenderOutcome:
    """
    Typeset a formula and report the outcome instead of raising.

    A single trailing backslash (a common OCR artifact) is removed before
    rendering; all other backslashes are LaTeX command markers and stay.
    """
    source = formula.strip()
    cleaned = _TRAILING_BACKSLASH.sub('', source)
    cleaned = expand_macros(cleaned)

    problem = check_structure(cleaned)
    if problem:
        return RenderOutcome(source=source, ok=False, error=problem)

    try:
        mathml = latex2mathml_convert(
            cleaned,
            display="block" if display_mode else "inline"
        )
    except Exception as e:
        return RenderOutcome(source=source, ok=False, error=str(e) or type(e).__name__)

    css_class = "math math-display" if display_mode else "math math-inline"
    return RenderOutcome(
        source=source,
        ok=True,
        html=f'<span class="{css_class}">{mathml}</span>'
    )


def error_span(source: str, error: Optional[str] = None) -> str:
    """Visible error marker that carries the original formula source."""
    title = f' title="{html.escape(error)}"' if error else ''
    return (
        f'<span class="latex-error" style="color: {MATH_ERROR_COLOR};"{title}>'
        f'{html.escape(source, quote=False)}</span>'
    )


def render_formula(formula, display_mode: bool = False) -> str:
    """
    Render one formula to HTML.

    Args:
        formula: LaTeX source without delimiters; None/non-str gives ""
        display_mode: True for block (display) math

    Returns:
        Typeset markup, or an error span containing the original source
    """
    if not isinstance(formula, str) or not formula.strip():
        return ''

    outcome = typeset(formula, display_mode)
    if outcome.ok:
        return outcome.html

    logger.debug(f"Formula rendering failed ({outcome.error}): {outcome.source[:80]}")
    return error_span(outcome.source, outcome.error)
